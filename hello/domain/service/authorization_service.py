"""Authorization gate."""

import logfire

from hello.domain.error import ForbiddenError, UnauthenticatedError
from hello.domain.model import Identity
from hello.domain.value import IdentityId


class AuthorizationService:
    """Owner-or-administrator checks for mutating routes."""

    def require_authenticated(self, acting: Identity | None) -> Identity:
        """Reject anonymous callers.

        Args:
            acting: Resolved session identity, or None

        Returns:
            The acting identity

        Raises:
            UnauthenticatedError: If there is no acting identity
        """
        if acting is None:
            logfire.info("Rejected anonymous request")
            raise UnauthenticatedError()
        return acting

    def authorize(self, acting: Identity | None, target_id: IdentityId) -> Identity:
        """Decide whether the acting identity may mutate the target.

        Rules, in order:
        1. No acting identity -> UnauthenticatedError
        2. Not the owner and not an administrator -> ForbiddenError
        3. Otherwise accepted

        Args:
            acting: Resolved session identity, or None
            target_id: ID of the identity that owns the resource

        Returns:
            The acting identity

        Raises:
            UnauthenticatedError: If not logged in
            ForbiddenError: If not owner or administrator
        """
        identity = self.require_authenticated(acting)

        if not identity.can_edit(target_id):
            logfire.warn(
                "Rejected edit of foreign identity",
                identity_id=identity.id,
                target_id=target_id,
            )
            raise ForbiddenError(identity.id, target_id)

        return identity
