"""Like entity.

Likes are the fact rows behind the likes_count counters. Each actor may
leave at most one reaction of each kind per discussion or reply.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from board.domain.model.common import DomainModel, utcnow
from board.domain.value import ActorId, LikeId, LikeTargetType, ReactionType


class Like(DomainModel):
    """Like entity.

    Business rules:
    - One row per (target, actor, reaction), enforced by a unique constraint
    - Never updated in place: created on react, deleted on retract
    - Polymorphic reference to the target (discussion or reply)
    """

    id: LikeId
    target_type: LikeTargetType
    target_id: UUID  # DiscussionId or ReplyId (both are UUIDs)
    actor_id: ActorId
    reaction: ReactionType = ReactionType.LIKE
    created_at: datetime = Field(default_factory=utcnow)
