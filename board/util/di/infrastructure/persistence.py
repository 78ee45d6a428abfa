"""Persistence infrastructure providers."""

from typing import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from board.config import Settings
from board.domain.repository import UnitOfWorkFactory
from board.persistence.database import create_engine, create_session_factory
from board.persistence.repository import PostgresUnitOfWorkFactory
from board.util.di.base import ProviderBase
from board.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL persistence; one engine per container."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the engine and dispose of its pool when the container closes."""
        engine = create_engine(settings.database, echo=settings.debug)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_uow_factory(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> UnitOfWorkFactory:
        """Provide unit of work factory.

        Every unit of work opens its own session and transaction, committed
        when the unit of work completes and rolled back on any error.
        """
        return PostgresUnitOfWorkFactory(session_factory)
