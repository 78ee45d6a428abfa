"""Reply hierarchy domain service."""

from typing import Optional, Tuple

import logfire

from board.domain.error import DepthExceededError, NotFoundError
from board.domain.model import Reply
from board.domain.repository import UnitOfWork
from board.domain.value import DiscussionId, ReplyId, ReplyPath

from .base import Service


class HierarchyService(Service):
    """Domain service assigning reply_level and reply_path at insert time.

    A reply's position is fixed when it is created: top-level replies get
    level 0 and a one-segment path, nested replies extend their parent's
    path by one segment. Segments are per-discussion sequence numbers, so
    sorting by path gives depth-first order with siblings oldest first.
    """

    def __init__(self, max_depth: int = 10) -> None:
        """Initialize hierarchy service.

        Args:
            max_depth: Deepest allowed reply_level
        """
        self.max_depth = max_depth

    async def resolve_parent(
        self,
        uow: UnitOfWork,
        discussion_id: DiscussionId,
        parent_reply_id: Optional[ReplyId],
    ) -> Optional[Reply]:
        """Load and check the parent of a new reply.

        Args:
            uow: Open unit of work
            discussion_id: Discussion the new reply goes into
            parent_reply_id: Requested parent (None for top-level)

        Returns:
            The parent reply, or None for a top-level reply

        Raises:
            NotFoundError: If the parent is missing, not visible, or belongs
                to another discussion
        """
        if parent_reply_id is None:
            return None

        parent = await uow.replies.find_by_id(parent_reply_id)
        if parent is None or not parent.status.is_visible:
            logfire.warn("Parent reply not found", parent_reply_id=str(parent_reply_id))
            raise NotFoundError("Reply", str(parent_reply_id))
        if parent.discussion_id != discussion_id:
            logfire.warn(
                "Parent reply belongs to another discussion",
                parent_reply_id=str(parent_reply_id),
                parent_discussion_id=str(parent.discussion_id),
                target_discussion_id=str(discussion_id),
            )
            raise NotFoundError("Reply", str(parent_reply_id))
        return parent

    def check_depth(self, parent: Optional[Reply]) -> int:
        """Compute the level of a child of ``parent``.

        Raises:
            DepthExceededError: If the level would exceed max_depth
        """
        level = 0 if parent is None else parent.reply_level + 1
        if level > self.max_depth:
            logfire.warn(
                "Reply depth exceeded",
                parent_reply_id=str(parent.id) if parent else None,
                level=level,
                max_depth=self.max_depth,
            )
            raise DepthExceededError(level, self.max_depth)
        return level

    def position(self, parent: Optional[Reply], seq: int) -> Tuple[int, ReplyPath]:
        """Level and path of a reply with sequence number ``seq``."""
        level = self.check_depth(parent)
        if parent is None:
            return level, ReplyPath.top_level(seq)
        return level, parent.reply_path.child(seq)

    async def place(
        self,
        uow: UnitOfWork,
        discussion_id: DiscussionId,
        parent: Optional[Reply],
    ) -> Tuple[int, ReplyPath]:
        """Allocate a sequence number and compute the new reply's position.

        The depth check runs before allocation so a rejected reply consumes
        nothing.

        Args:
            uow: Open unit of work
            discussion_id: Discussion the new reply goes into
            parent: Parent reply (None for top-level)

        Returns:
            Tuple of (reply_level, reply_path)

        Raises:
            DepthExceededError: If the level would exceed max_depth
            NotFoundError: If the discussion row is gone
        """
        with logfire.span(
            "hierarchy_service.place",
            discussion_id=str(discussion_id),
            parent_reply_id=str(parent.id) if parent else None,
        ):
            self.check_depth(parent)
            seq = await uow.discussions.next_reply_seq(discussion_id)
            if seq is None:
                raise NotFoundError("Discussion", str(discussion_id))
            return self.position(parent, seq)
