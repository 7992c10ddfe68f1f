"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from hello.domain.model.identity import Identity
from hello.domain.value import IdentityId


class IdentityRepository(ABC):
    """Repository for the Identity aggregate.

    Defines the contract for identity persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID.

        Args:
            identity_id: The identity's "<uid>@<provider>" key

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, identity: Identity) -> Identity:
        """Save an identity (create or update).

        An existing record keeps its created_at and is_administrator. The
        write is durable once this returns.

        Args:
            identity: The identity to save

        Returns:
            The identity as stored

        Raises:
            PersistenceFailureError: If the write fails
        """
        pass

    @abstractmethod
    async def find_recently_edited(self, limit: int) -> list[Identity]:
        """List identities by most recent favorite edit.

        Args:
            limit: Maximum number of identities to return

        Returns:
            Identities ordered by edited_at, newest first
        """
        pass
