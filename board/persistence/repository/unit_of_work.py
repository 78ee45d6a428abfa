"""PostgreSQL unit of work.

Wraps one AsyncSession transaction. Backend exceptions raised inside the
transaction, or while committing it, are translated into domain errors so
callers never see driver error codes.
"""

from types import TracebackType
from typing import Optional, Type

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.domain.error import (
    ConcurrencyConflictError,
    DomainError,
    StoreUnavailableError,
)
from board.domain.repository import UnitOfWork, UnitOfWorkFactory
from board.persistence.error import (
    RETRYABLE_SQLSTATES,
    sqlstate,
    translate_integrity_error,
)
from board.persistence.repository.discussion import PostgresDiscussionRepository
from board.persistence.repository.like import PostgresLikeRepository
from board.persistence.repository.reply import PostgresReplyRepository


def translate_error(error: BaseException) -> Optional[DomainError]:
    """Map a backend exception to its domain error.

    Args:
        error: Exception raised by SQLAlchemy or the driver

    Returns:
        The domain error to raise instead, or None if the exception is not
        a recognised backend failure
    """
    if isinstance(error, DBAPIError):
        if sqlstate(error) in RETRYABLE_SQLSTATES:
            return ConcurrencyConflictError("Transaction could not be serialized")
        if isinstance(error, IntegrityError):
            return translate_integrity_error(error, "Row", "write")
        if (
            isinstance(error, (OperationalError, InterfaceError))
            or error.connection_invalidated
        ):
            return StoreUnavailableError("Database unavailable")
        return None
    # Pool exhaustion and socket failures; asyncpg statement timeouts raise
    # TimeoutError, an OSError subclass
    if isinstance(error, (PoolTimeoutError, OSError)):
        return StoreUnavailableError("Database unavailable")
    return None


class PostgresUnitOfWork(UnitOfWork):
    """Unit of work backed by a single AsyncSession transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize unit of work.

        Args:
            session_factory: Factory for creating sessions
        """
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def _begin(self) -> None:
        self.session = self.session_factory()
        await self.session.begin()
        self.discussions = PostgresDiscussionRepository(self.session)
        self.replies = PostgresReplyRepository(self.session)
        self.likes = PostgresLikeRepository(self.session)

    async def commit(self) -> None:
        assert self.session is not None
        await self.session.commit()

    async def rollback(self) -> None:
        assert self.session is not None
        await self.session.rollback()

    async def _close(self) -> None:
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        try:
            await self._begin()
        except (DBAPIError, PoolTimeoutError, OSError) as e:
            await self._close()
            translated = translate_error(e)
            if translated is None:
                raise
            raise translated from e
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        except (DBAPIError, PoolTimeoutError, OSError) as e:
            translated = translate_error(e)
            if translated is None:
                raise
            raise translated from e

        if exc is not None:
            translated = translate_error(exc)
            if translated is not None:
                raise translated from exc


class PostgresUnitOfWorkFactory(UnitOfWorkFactory):
    """Creates PostgresUnitOfWork instances from a session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    def __call__(self) -> PostgresUnitOfWork:
        return PostgresUnitOfWork(self.session_factory)
