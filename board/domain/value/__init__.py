"""Domain value objects for the discussion board."""

from board.domain.value.identifiers import ActorId, DiscussionId, LikeId, ReplyId
from board.domain.value.types import (
    Actor,
    ContentStatus,
    DiscussionSortOrder,
    DisplayName,
    LikeState,
    LikeTargetType,
    ReactionType,
    ReplyPath,
)

__all__ = [
    # Identifiers
    "ActorId",
    "DiscussionId",
    "ReplyId",
    "LikeId",
    # Types
    "Actor",
    "ContentStatus",
    "DiscussionSortOrder",
    "DisplayName",
    "LikeState",
    "LikeTargetType",
    "ReactionType",
    "ReplyPath",
]
