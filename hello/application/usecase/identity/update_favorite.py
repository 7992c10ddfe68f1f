"""Update favorite use case."""

from typing import Annotated

import logfire
from pydantic import BaseModel, StringConstraints

from hello.domain.service import AuthorizationService, IdentityService, SessionService
from hello.domain.value import IdentityId

from .get_favorite import FavoriteResponse

FavoriteValue = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)
]


class UpdateFavoriteRequest(BaseModel):
    """Update favorite request."""

    token: str | None = None  # Session cookie, if any
    identity_id: str  # Identity that owns the favorite
    favorite_value: FavoriteValue


class UpdateFavoriteUseCase:
    """Use case for editing an identity's favorite.

    The owner can edit their own favorite; administrators can edit anyone's.
    """

    def __init__(
        self,
        session_service: SessionService,
        authorization_service: AuthorizationService,
        identity_service: IdentityService,
    ) -> None:
        """Initialize update favorite use case.

        Args:
            session_service: Session resolution domain service
            authorization_service: Authorization gate
            identity_service: Identity domain service
        """
        self.session_service = session_service
        self.authorization_service = authorization_service
        self.identity_service = identity_service

    async def execute(self, request: UpdateFavoriteRequest) -> FavoriteResponse:
        """Execute update favorite flow.

        Steps:
        1. Resolve the session to the acting identity
        2. Ask the authorization gate about the target
        3. Load the target and apply the new value
        4. Persist

        Args:
            request: Request with session token, target and new value

        Returns:
            The stored favorite

        Raises:
            InvalidSessionError: If the session token is invalid
            StaleSessionError: If the session identity no longer exists
            UnauthenticatedError: If not logged in
            ForbiddenError: If not owner or administrator
            NotFoundError: If the target identity does not exist
        """
        target_id = IdentityId(request.identity_id)

        acting = await self.session_service.resolve(request.token)
        acting = self.authorization_service.authorize(acting, target_id)

        # Reuse the session's record when editing your own favorite
        if acting.id == target_id:
            target = acting
        else:
            target = await self.identity_service.get_by_id(target_id)

        updated = await self.identity_service.update_favorite(
            target, request.favorite_value
        )

        if acting.id != target_id:
            logfire.info(
                "Administrator edited favorite",
                identity_id=acting.id,
                target_id=target_id,
            )

        return FavoriteResponse(
            identity_id=updated.id,
            favorite_value=updated.favorite_value,
            edited_at=updated.edited_at,
        )
