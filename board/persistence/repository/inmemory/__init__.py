"""In-memory repository implementations for testing."""

from .database import InMemoryDatabase, InMemoryTables
from .discussion import InMemoryDiscussionRepository
from .like import InMemoryLikeRepository
from .reply import InMemoryReplyRepository
from .unit_of_work import InMemoryUnitOfWork, InMemoryUnitOfWorkFactory

__all__ = [
    "InMemoryDatabase",
    "InMemoryDiscussionRepository",
    "InMemoryLikeRepository",
    "InMemoryReplyRepository",
    "InMemoryTables",
    "InMemoryUnitOfWork",
    "InMemoryUnitOfWorkFactory",
]
