"""Reply entity.

Replies form a bounded-depth tree under a discussion. Their position in the
tree is captured by a materialized path assigned once at insert time.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from board.domain.model.common import DomainModel, utcnow
from board.domain.value import (
    ActorId,
    ContentStatus,
    DiscussionId,
    DisplayName,
    ReplyId,
    ReplyPath,
)

CONTENT_MIN_LENGTH = 1
CONTENT_MAX_LENGTH = 5000


class Reply(DomainModel):
    """Reply entity.

    Threading is managed through:
    - parent_reply_id: Direct parent reply (None for top-level)
    - reply_level: Nesting level (0 for top-level)
    - reply_path: Ancestor sequence numbers ending with this reply's own
    """

    id: ReplyId
    discussion_id: DiscussionId
    parent_reply_id: Optional[ReplyId] = None
    content: str = Field(min_length=CONTENT_MIN_LENGTH, max_length=CONTENT_MAX_LENGTH)
    author_id: ActorId
    author_name: DisplayName
    reply_level: int = Field(default=0, ge=0)
    reply_path: ReplyPath
    likes_count: int = Field(default=0, ge=0)
    child_replies_count: int = Field(default=0, ge=0)
    status: ContentStatus = ContentStatus.ACTIVE
    is_edited: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def validate_hierarchy(self) -> "Reply":
        """Level, path and parent must describe the same position."""
        if self.reply_level != self.reply_path.level:
            raise ValueError("reply_level does not match reply_path depth")
        if (self.parent_reply_id is None) != (self.reply_level == 0):
            raise ValueError("Only top-level replies may omit parent_reply_id")
        return self
