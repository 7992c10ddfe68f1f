"""PostgreSQL implementation of Identity repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hello.domain.error import PersistenceFailureError
from hello.domain.model import Identity
from hello.domain.repository import IdentityRepository
from hello.domain.value import IdentityId
from hello.persistence.mappers import identity_to_dict, row_to_identity
from hello.persistence.tables import identities_table

# Columns an upsert must never overwrite on an existing row
_PRESERVED_ON_CONFLICT = ("id", "created_at", "is_administrator")


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID.

        Args:
            identity_id: Identity ID to look up

        Returns:
            Identity if found, None otherwise
        """
        stmt = select(identities_table).where(identities_table.c.id == identity_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_identity(dict(row)) if row else None

    async def save(self, identity: Identity) -> Identity:
        """Save an identity with a single INSERT ... ON CONFLICT DO UPDATE.

        Concurrent logins for the same ID serialize on the row; the existing
        created_at and is_administrator always win. The write is committed
        before this returns, so callers may bind a session to it.

        Args:
            identity: Identity to save

        Returns:
            Identity as stored

        Raises:
            PersistenceFailureError: If the database rejects the write
        """
        identity_dict = identity_to_dict(identity)

        stmt = insert(identities_table).values(**identity_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[identities_table.c.id],
            set_={
                key: stmt.excluded[key]
                for key in identity_dict
                if key not in _PRESERVED_ON_CONFLICT
            },
        ).returning(identities_table)

        try:
            result = await self.session.execute(stmt)
            row = result.mappings().one()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceFailureError(identity.id, str(e)) from e

        return row_to_identity(dict(row))

    async def find_recently_edited(self, limit: int) -> list[Identity]:
        """List identities by most recent favorite edit.

        Args:
            limit: Maximum number of identities

        Returns:
            Identities ordered by edited_at, newest first
        """
        stmt = (
            select(identities_table)
            .order_by(identities_table.c.edited_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_identity(dict(row)) for row in result.mappings().all()]
