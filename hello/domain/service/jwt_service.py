"""Signed token domain service."""

import logfire

from hello.config import AuthSettings
from hello.domain.value import AuthProvider, LoginHandshake
from hello.util.jwt import (
    JWTError,
    TokenPayload,
    create_login_state_token,
    create_token,
    verify_login_state_token,
    verify_token,
)


class JWTService:
    """Signs and verifies the session and login state cookies."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, identity_id: str, provider: str) -> str:
        """Sign a session token for a stored identity."""
        with logfire.span("jwt_service.create_token", identity_id=identity_id):
            return create_token(identity_id, provider, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token.

        Raises:
            JWTError: If the token is invalid or expired
        """
        try:
            return verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.warn("Session token rejected", reason=str(e))
            raise

    def create_login_state(self, handshake: LoginHandshake) -> str:
        return create_login_state_token(
            handshake.provider.value,
            handshake.state,
            handshake.code_verifier,
            self.auth_settings,
        )

    def read_login_state(self, token: str | None) -> LoginHandshake | None:
        """Handshake from the login state cookie, or None if absent or unusable."""
        if not token:
            return None

        try:
            payload = verify_login_state_token(token, self.auth_settings)
        except JWTError as e:
            logfire.warn("Login state rejected", reason=str(e))
            return None

        provider = AuthProvider.from_name(payload.provider)
        if provider is None:
            return None

        return LoginHandshake(
            provider=provider,
            state=payload.state,
            code_verifier=payload.code_verifier,
        )
