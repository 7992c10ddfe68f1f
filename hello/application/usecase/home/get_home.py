"""Home page use case."""

from pydantic import BaseModel

from hello.application.usecase.auth.get_current_identity import IdentityInfo
from hello.config import SharingSettings
from hello.domain.service import SessionService
from hello.domain.value import AuthProvider


class GetHomeRequest(BaseModel):
    """Home page request."""

    token: str | None = None  # Session cookie, if any


class LoginLink(BaseModel):
    """Sign-in option for anonymous visitors."""

    provider: AuthProvider
    label: str
    url: str


class GetHomeResponse(BaseModel):
    """Home page response.

    Anonymous visitors get login links only; signed-in identities get
    their profile, an edit link and a suggested share message.
    """

    authenticated: bool
    login_links: list[LoginLink] = []
    identity: IdentityInfo | None = None
    edit_link: str | None = None
    share_link: str | None = None
    share_message: str | None = None
    logout_link: str | None = None


class GetHomeUseCase:
    """Use case for the home page."""

    def __init__(
        self, session_service: SessionService, sharing_settings: SharingSettings
    ) -> None:
        self.session_service = session_service
        self.sharing_settings = sharing_settings

    async def execute(self, request: GetHomeRequest) -> GetHomeResponse:
        """Build the home page for the caller.

        Raises:
            InvalidSessionError: If the session token is invalid
            StaleSessionError: If the session identity no longer exists
        """
        identity = await self.session_service.resolve(request.token)

        if identity is None:
            return GetHomeResponse(
                authenticated=False,
                login_links=[
                    LoginLink(
                        provider=provider,
                        label=f"Sign in with {provider.value.capitalize()}",
                        url=f"/auth/login/{provider.value}",
                    )
                    for provider in AuthProvider
                ],
            )

        share_message = self.sharing_settings.message_template.format(
            favorite=identity.favorite_value,
            site_url=self.sharing_settings.site_url,
        )

        return GetHomeResponse(
            authenticated=True,
            identity=IdentityInfo.from_identity(identity),
            edit_link=f"/identities/{identity.id}/favorite",
            share_link=f"/share/{identity.provider}",
            share_message=share_message,
            logout_link="/auth/logout",
        )
