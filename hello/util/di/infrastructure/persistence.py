"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from hello.config import Settings
from hello.domain.repository import IdentityRepository
from hello.persistence.database import create_engine, create_session_factory, transaction
from hello.persistence.repository import PostgresIdentityRepository
from hello.util.di.base import ProviderBase
from hello.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Identity storage component; mocked by an in-memory repository in tests."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL identity storage."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the engine; disposed when the app container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the request's session; each save commits its own write."""
        async with transaction(session_factory) as session:
            yield session

    @provide(scope=Scope.REQUEST)
    def get_identity_repository(self, session: AsyncSession) -> IdentityRepository:
        """Provide identity repository."""
        return PostgresIdentityRepository(session)
