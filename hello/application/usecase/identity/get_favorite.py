"""Get favorite use case."""

from datetime import datetime

from pydantic import BaseModel

from hello.domain.service import AuthorizationService, IdentityService, SessionService
from hello.domain.value import IdentityId


class GetFavoriteRequest(BaseModel):
    """Get favorite request."""

    token: str | None = None  # Session cookie, if any
    identity_id: str  # Identity that owns the favorite


class FavoriteResponse(BaseModel):
    """Favorite value of one identity."""

    identity_id: str
    favorite_value: str
    edited_at: datetime


class GetFavoriteUseCase:
    """Use case for reading a favorite through the edit form.

    Same gate as editing: only the owner or an administrator gets here.
    """

    def __init__(
        self,
        session_service: SessionService,
        authorization_service: AuthorizationService,
        identity_service: IdentityService,
    ) -> None:
        self.session_service = session_service
        self.authorization_service = authorization_service
        self.identity_service = identity_service

    async def execute(self, request: GetFavoriteRequest) -> FavoriteResponse:
        """Execute get favorite flow.

        Raises:
            InvalidSessionError: If the session token is invalid
            StaleSessionError: If the session identity no longer exists
            UnauthenticatedError: If not logged in
            ForbiddenError: If not owner or administrator
            NotFoundError: If the target identity does not exist
        """
        target_id = IdentityId(request.identity_id)

        acting = await self.session_service.resolve(request.token)
        self.authorization_service.authorize(acting, target_id)

        target = await self.identity_service.get_by_id(target_id)

        return FavoriteResponse(
            identity_id=target.id,
            favorite_value=target.favorite_value,
            edited_at=target.edited_at,
        )
