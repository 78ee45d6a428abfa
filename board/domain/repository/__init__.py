"""Repository interfaces for the discussion board domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from board.domain.repository.discussion import DiscussionRepository
from board.domain.repository.like import LikeRepository
from board.domain.repository.reply import ReplyRepository
from board.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "DiscussionRepository",
    "ReplyRepository",
    "LikeRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
