"""Get current identity use case."""

from datetime import datetime

from pydantic import BaseModel

from hello.domain.model import Identity
from hello.domain.service import SessionService


class GetCurrentIdentityRequest(BaseModel):
    """Get current identity request."""

    token: str | None = None  # Session cookie, if any


class IdentityInfo(BaseModel):
    """Identity information for response.

    Credentials and the raw provider payload are never exposed.
    """

    identity_id: str
    provider: str
    name: str | None
    location: str | None
    email: str | None
    profile_link: str | None
    portrait_link: str | None
    favorite_value: str
    is_administrator: bool
    created_at: datetime
    edited_at: datetime

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityInfo":
        return cls(
            identity_id=identity.id,
            provider=identity.provider,
            name=identity.profile.name,
            location=identity.profile.location,
            email=identity.profile.email,
            profile_link=identity.profile.profile_link,
            portrait_link=identity.profile.portrait_link,
            favorite_value=identity.favorite_value,
            is_administrator=identity.is_administrator,
            created_at=identity.created_at,
            edited_at=identity.edited_at,
        )


class GetCurrentIdentityResponse(BaseModel):
    """Get current identity response."""

    authenticated: bool
    identity: IdentityInfo | None = None


class GetCurrentIdentityUseCase:
    """Use case for getting the signed-in identity."""

    def __init__(self, session_service: SessionService) -> None:
        """Initialize get current identity use case.

        Args:
            session_service: Session resolution domain service
        """
        self.session_service = session_service

    async def execute(
        self, request: GetCurrentIdentityRequest
    ) -> GetCurrentIdentityResponse:
        """Execute get current identity flow.

        Args:
            request: Request with optional session token

        Returns:
            The identity, or authenticated=False for anonymous visitors

        Raises:
            InvalidSessionError: If the token is invalid or expired
            StaleSessionError: If the token's identity no longer exists
        """
        identity = await self.session_service.resolve(request.token)
        if identity is None:
            return GetCurrentIdentityResponse(authenticated=False)

        return GetCurrentIdentityResponse(
            authenticated=True,
            identity=IdentityInfo.from_identity(identity),
        )
