"""PostgreSQL repository implementations."""

from board.persistence.repository.discussion import PostgresDiscussionRepository
from board.persistence.repository.like import PostgresLikeRepository
from board.persistence.repository.reply import PostgresReplyRepository
from board.persistence.repository.unit_of_work import (
    PostgresUnitOfWork,
    PostgresUnitOfWorkFactory,
)

__all__ = [
    "PostgresDiscussionRepository",
    "PostgresReplyRepository",
    "PostgresLikeRepository",
    "PostgresUnitOfWork",
    "PostgresUnitOfWorkFactory",
]
