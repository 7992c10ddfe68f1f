"""Login use case."""

import logfire
from pydantic import BaseModel

from hello.domain.service import AuthService, IdentityService, JWTService
from hello.domain.value import AuthProvider


class LoginRequest(BaseModel):
    """Callback parameters for a provider login."""

    provider: AuthProvider
    code: str
    state: str
    login_state: str | None = None  # Signed handshake cookie from the login redirect


class LoginResponse(BaseModel):
    """Session token for the stored identity."""

    token: str
    identity_id: str
    provider: str


class LoginUseCase:
    """Completes a provider login and opens a session."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_service: IdentityService,
        jwt_service: JWTService,
    ) -> None:
        self.auth_service = auth_service
        self.identity_service = identity_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Handshake, upsert, then sign a session token.

        The token is signed only after the identity is committed, so a failed
        write never leaves a session that points at nothing.

        Raises:
            LoginStateMismatchError: If the callback is not for this browser's login
            ProviderError: If the provider handshake fails
            PersistenceFailureError: If the identity could not be stored
        """
        handshake = self.jwt_service.read_login_state(request.login_state)
        payload = await self.auth_service.complete_login(
            request.provider, request.code, request.state, handshake
        )

        with logfire.span(
            "login_identity",
            provider=payload.provider,
            provider_uid=payload.provider_uid,
        ):
            identity = await self.identity_service.upsert(payload)
            token = self.jwt_service.create_token(identity.id, identity.provider)

        return LoginResponse(
            token=token,
            identity_id=identity.id,
            provider=identity.provider,
        )
