"""Session resolution domain service."""

import logfire

from hello.domain.error import InvalidSessionError, StaleSessionError
from hello.domain.model import Identity
from hello.domain.repository import IdentityRepository
from hello.domain.value import IdentityId
from hello.util.jwt import JWTError

from .jwt_service import JWTService


class SessionService:
    """Maps a session token to the identity it was issued for."""

    def __init__(
        self, jwt_service: JWTService, identity_repository: IdentityRepository
    ) -> None:
        """Initialize session service.

        Args:
            jwt_service: Session token service
            identity_repository: Identity repository
        """
        self.jwt_service = jwt_service
        self.identity_repository = identity_repository

    async def resolve(self, token: str | None) -> Identity | None:
        """Resolve a session token.

        A missing token is an anonymous visitor. A token that does not
        verify, or that names an identity with no record, is an
        authentication failure and must not be treated as anonymous.

        Args:
            token: Session token from the cookie, if any

        Returns:
            Identity for the session, or None when there is no token

        Raises:
            InvalidSessionError: If the token is malformed, forged or expired
            StaleSessionError: If the token's identity has no record
        """
        if not token:
            return None

        with logfire.span("session_service.resolve"):
            try:
                payload = self.jwt_service.verify_token(token)
            except JWTError as e:
                raise InvalidSessionError(str(e)) from e

            identity_id = IdentityId(payload.identity_id)
            identity = await self.identity_repository.find_by_id(identity_id)
            if identity is None:
                logfire.warn("Session refers to missing identity", identity_id=identity_id)
                raise StaleSessionError(identity_id)

            return identity
