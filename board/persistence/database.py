"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from board.config import DatabaseSettings


def create_engine(database: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create the async engine.

    Statements that run longer than ``command_timeout`` are cancelled by
    asyncpg and surface as a timeout, which the unit of work reports as the
    store being unavailable.

    Args:
        database: Database settings
        echo: Log every SQL statement
    """
    return create_async_engine(
        database.url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_timeout=database.pool_timeout,
        isolation_level=database.isolation_level,
        connect_args={"command_timeout": database.command_timeout},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory; each unit of work opens one session."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
