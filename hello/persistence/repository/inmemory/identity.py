"""In-memory identity repository for testing."""

from typing import Optional

from hello.domain.error import PersistenceFailureError
from hello.domain.model.identity import Identity
from hello.domain.repository.identity import IdentityRepository
from hello.domain.value import IdentityId


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing.

    Set ``fail_writes`` to make every save raise, as a broken database would.
    """

    def __init__(self) -> None:
        self._identities: dict[IdentityId, Identity] = {}
        self.fail_writes = False

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID."""
        return self._identities.get(identity_id)

    async def save(self, identity: Identity) -> Identity:
        """Save or update an identity, preserving created_at and is_administrator."""
        if self.fail_writes:
            raise PersistenceFailureError(identity.id, "writes disabled")

        existing = self._identities.get(identity.id)
        if existing:
            identity = identity.model_copy(
                update={
                    "created_at": existing.created_at,
                    "is_administrator": existing.is_administrator,
                }
            )
        self._identities[identity.id] = identity
        return identity

    async def find_recently_edited(self, limit: int) -> list[Identity]:
        """List identities by most recent favorite edit."""
        ordered = sorted(
            self._identities.values(), key=lambda i: i.edited_at, reverse=True
        )
        return ordered[:limit]

    def grant_administrator(self, identity_id: IdentityId) -> None:
        """Flag an identity as administrator, as an operator would out-of-band."""
        identity = self._identities[identity_id]
        self._identities[identity_id] = identity.model_copy(
            update={"is_administrator": True}
        )
