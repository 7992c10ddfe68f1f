"""Share message use case."""

import logfire
from pydantic import BaseModel, Field

from hello.adapter.error import ProviderError
from hello.domain.error import CredentialRejectedError, SignInExpiredError
from hello.domain.model import Identity
from hello.domain.service import (
    AuthorizationService,
    AuthService,
    IdentityService,
    SessionService,
    ShareService,
)
from hello.domain.value import AuthProvider


class ShareMessageRequest(BaseModel):
    """Share message request."""

    token: str | None = None  # Session cookie, if any
    provider: str  # Provider named in the URL
    message: str = Field(min_length=1, max_length=5000)


class ShareMessageResponse(BaseModel):
    """Share message response."""

    provider: AuthProvider
    post_id: str
    url: str
    message: str


class ShareMessageUseCase:
    """Use case for publishing a message to the signed-in identity's feed.

    Provider access tokens can expire long before the session does. When the
    provider refuses the stored token, it is refreshed once, stored, and the
    message sent again with the new token.
    """

    def __init__(
        self,
        session_service: SessionService,
        authorization_service: AuthorizationService,
        share_service: ShareService,
        auth_service: AuthService,
        identity_service: IdentityService,
    ) -> None:
        """Initialize share message use case.

        Args:
            session_service: Session resolution domain service
            authorization_service: Authorization gate
            share_service: Share domain service
            auth_service: Provider handshakes, for credential refresh
            identity_service: Identity domain service, to store a new credential
        """
        self.session_service = session_service
        self.authorization_service = authorization_service
        self.share_service = share_service
        self.auth_service = auth_service
        self.identity_service = identity_service

    async def execute(self, request: ShareMessageRequest) -> ShareMessageResponse:
        """Execute share flow.

        Raises:
            InvalidSessionError: If the session token is invalid
            StaleSessionError: If the session identity no longer exists
            UnauthenticatedError: If not logged in
            ProviderMismatchError: If the URL names another provider
            UnsupportedProviderError: If the identity's provider cannot publish
            SignInExpiredError: If the credential is refused and cannot be refreshed
            PublishFailureError: If the provider call fails
        """
        acting = await self.session_service.resolve(request.token)
        identity = self.authorization_service.require_authenticated(acting)

        try:
            result = await self.share_service.share(
                identity, request.provider, request.message
            )
        except CredentialRejectedError:
            identity = await self._refresh_credential(identity)
            result = await self.share_service.share(
                identity, request.provider, request.message
            )

        return ShareMessageResponse(
            provider=result.provider,
            post_id=result.post_id,
            url=result.url,
            message=result.message,
        )

    async def _refresh_credential(self, identity: Identity) -> Identity:
        """Swap the identity's credential for a fresh one and store it.

        Raises:
            SignInExpiredError: If the provider cannot or will not refresh
        """
        provider = AuthProvider(identity.provider)
        try:
            credential = await self.auth_service.refresh_credential(
                provider, identity.credential
            )
        except ProviderError as e:
            logfire.warn(
                "Credential refresh refused", identity_id=identity.id, error=str(e)
            )
            raise SignInExpiredError(identity.provider) from e

        if credential is None:
            raise SignInExpiredError(identity.provider)

        return await self.identity_service.update_credential(identity, credential)
