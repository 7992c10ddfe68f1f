"""Async PostgreSQL engine and per-request transactions."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import logfire
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hello.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the engine from DATABASE__* settings.

    SQL is echoed when DEBUG is on.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory; rows stay readable after commit."""
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """One session per request, committed on success and rolled back on error.

    Args:
        session_factory: Factory for creating sessions

    Yields:
        Database session
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception as e:
            logfire.warn("Transaction rolled back", error=str(e))
            await session.rollback()
            raise
        await session.commit()
