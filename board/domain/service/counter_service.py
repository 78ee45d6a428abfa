"""Counter maintenance domain service.

Denormalized counters are derived from fact-row events only: a reply or like
was inserted, or a reply or like was deleted. Every adjustment is a single
atomic SQL-level update made in the caller's unit of work, so a failed
counter write rolls back the fact write with it. Decrements are floored at
zero, which makes replaying a delete event harmless.
"""

from datetime import datetime
from uuid import UUID

import logfire

from board.domain.error import NotFoundError
from board.domain.model import Like, Reply
from board.domain.repository import UnitOfWork
from board.domain.value import DiscussionId, LikeTargetType, ReplyId

from .base import Service


class CounterService(Service):
    """Domain service keeping engagement counters consistent with fact rows."""

    async def reply_inserted(
        self, uow: UnitOfWork, reply: Reply, at: datetime
    ) -> int:
        """Apply counter side effects of a new reply.

        Bumps the discussion's replies_count and last_activity_at, and the
        parent's child_replies_count for nested replies.

        Args:
            uow: Open unit of work
            reply: The inserted reply
            at: Activity timestamp

        Returns:
            New replies_count of the discussion

        Raises:
            NotFoundError: If the discussion or parent row is gone
        """
        with logfire.span(
            "counter_service.reply_inserted",
            reply_id=str(reply.id),
            discussion_id=str(reply.discussion_id),
        ):
            replies_count = await uow.discussions.increment_replies_count(
                reply.discussion_id, at
            )
            if replies_count is None:
                raise NotFoundError("Discussion", str(reply.discussion_id))

            if reply.parent_reply_id is not None:
                child_count = await uow.replies.increment_child_replies_count(
                    reply.parent_reply_id
                )
                if child_count is None:
                    raise NotFoundError("Reply", str(reply.parent_reply_id))

            return replies_count

    async def reply_deleted(self, uow: UnitOfWork, reply: Reply) -> None:
        """Apply counter side effects of a deleted reply.

        Parents that were removed in the same cascade are skipped silently.

        Args:
            uow: Open unit of work
            reply: The deleted reply
        """
        with logfire.span(
            "counter_service.reply_deleted",
            reply_id=str(reply.id),
            discussion_id=str(reply.discussion_id),
        ):
            await uow.discussions.decrement_replies_count(reply.discussion_id)
            if reply.parent_reply_id is not None:
                await uow.replies.decrement_child_replies_count(reply.parent_reply_id)

    async def like_inserted(self, uow: UnitOfWork, like: Like) -> int:
        """Apply counter side effects of a new like.

        Discussion likes also advance the discussion's last_activity_at.

        Returns:
            New likes_count of the target

        Raises:
            NotFoundError: If the target row is gone
        """
        with logfire.span(
            "counter_service.like_inserted",
            target_type=like.target_type.value,
            target_id=str(like.target_id),
        ):
            if like.target_type == LikeTargetType.DISCUSSION:
                count = await uow.discussions.increment_likes_count(
                    DiscussionId(like.target_id), like.created_at
                )
            else:
                count = await uow.replies.increment_likes_count(
                    ReplyId(like.target_id)
                )

            if count is None:
                raise NotFoundError(like.target_type.value, str(like.target_id))
            return count

    async def like_deleted(
        self, uow: UnitOfWork, target_type: LikeTargetType, target_id: UUID
    ) -> int:
        """Apply counter side effects of a deleted like.

        Returns:
            New likes_count of the target (0 if the target is gone)
        """
        with logfire.span(
            "counter_service.like_deleted",
            target_type=target_type.value,
            target_id=str(target_id),
        ):
            if target_type == LikeTargetType.DISCUSSION:
                count = await uow.discussions.decrement_likes_count(
                    DiscussionId(target_id)
                )
            else:
                count = await uow.replies.decrement_likes_count(ReplyId(target_id))
            return count or 0
