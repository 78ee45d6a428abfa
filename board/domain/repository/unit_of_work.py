"""Unit of work interface.

A unit of work is one store transaction. Repositories obtained from it share
that transaction, so a fact write and its counter side effects commit or roll
back together.
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Type

from board.domain.repository.discussion import DiscussionRepository
from board.domain.repository.like import LikeRepository
from board.domain.repository.reply import ReplyRepository


class UnitOfWork(ABC):
    """A single transaction over the engagement store.

    Usage::

        async with uow_factory() as uow:
            await uow.replies.save(reply)
            await uow.discussions.increment_replies_count(...)

    Leaving the block normally commits. Leaving it with any exception,
    including cancellation, rolls back.
    """

    discussions: DiscussionRepository
    replies: ReplyRepository
    likes: LikeRepository

    @abstractmethod
    async def _begin(self) -> None:
        """Open the transaction and bind repositories to it."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard every change made in the transaction."""
        pass

    async def _close(self) -> None:
        """Release resources held by the transaction."""
        pass

    async def __aenter__(self) -> "UnitOfWork":
        await self._begin()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self._close()


class UnitOfWorkFactory(ABC):
    """Creates a fresh unit of work per transaction attempt."""

    @abstractmethod
    def __call__(self) -> UnitOfWork:
        pass
