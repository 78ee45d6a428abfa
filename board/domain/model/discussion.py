"""Discussion aggregate root.

Discussions are the top-level threads of the community board. Their
engagement counters are denormalized from the reply and like fact rows and
are only ever changed by the counter service.
"""

from datetime import datetime

from pydantic import Field, model_validator

from board.domain.model.common import DomainModel, utcnow
from board.domain.value import ActorId, ContentStatus, DiscussionId, DisplayName

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
CONTENT_MIN_LENGTH = 10
CONTENT_MAX_LENGTH = 10000


class Discussion(DomainModel):
    """Discussion aggregate root.

    Counters:
    - likes_count: live discussion-like rows
    - replies_count: live replies at any depth
    - views_count: approximate, best-effort view tally
    - reply_seq: high-water mark of thread sequence numbers handed out to
      replies; never decremented so reply paths stay unique
    """

    id: DiscussionId
    title: str = Field(min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    content: str = Field(min_length=CONTENT_MIN_LENGTH, max_length=CONTENT_MAX_LENGTH)
    author_id: ActorId
    author_name: DisplayName
    status: ContentStatus = ContentStatus.ACTIVE
    is_pinned: bool = False
    likes_count: int = Field(default=0, ge=0)
    replies_count: int = Field(default=0, ge=0)
    views_count: int = Field(default=0, ge=0)
    reply_seq: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    last_activity_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def validate_activity_timestamp(self) -> "Discussion":
        """Last activity can never precede creation."""
        if self.last_activity_at < self.created_at:
            raise ValueError("last_activity_at must not precede created_at")
        return self

    @property
    def is_visible(self) -> bool:
        """Whether regular readers may see and interact with it."""
        return self.status.is_visible
