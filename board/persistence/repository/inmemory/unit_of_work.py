"""In-memory unit of work for testing."""

from typing import Optional

from board.domain.repository import UnitOfWork, UnitOfWorkFactory

from .database import InMemoryDatabase, InMemoryTables
from .discussion import InMemoryDiscussionRepository
from .like import InMemoryLikeRepository
from .reply import InMemoryReplyRepository


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of work over a private copy of the in-memory tables."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database
        self._working: Optional[InMemoryTables] = None
        self._locked = False

    async def _begin(self) -> None:
        await self.database.lock.acquire()
        self._locked = True
        self._working = self.database.tables.copy()
        self.discussions = InMemoryDiscussionRepository(self._working)
        self.replies = InMemoryReplyRepository(self._working)
        self.likes = InMemoryLikeRepository(self._working)

    async def commit(self) -> None:
        assert self._working is not None
        self.database.tables = self._working
        self._working = None

    async def rollback(self) -> None:
        self._working = None

    async def _close(self) -> None:
        if self._locked:
            self._locked = False
            self.database.lock.release()


class InMemoryUnitOfWorkFactory(UnitOfWorkFactory):
    """Creates InMemoryUnitOfWork instances over one shared database."""

    def __init__(self, database: Optional[InMemoryDatabase] = None) -> None:
        self.database = database or InMemoryDatabase()

    def __call__(self) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(self.database)
