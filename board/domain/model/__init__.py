"""Domain model entities for the discussion board."""

from board.domain.model.discussion import Discussion
from board.domain.model.like import Like
from board.domain.model.reply import Reply

__all__ = [
    "Discussion",
    "Reply",
    "Like",
]
