"""Reply repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from board.domain.model.reply import Reply
from board.domain.value import ContentStatus, DiscussionId, ReplyId, ReplyPath


class ReplyRepository(ABC):
    """Repository for Reply entity.

    Defines the contract for reply persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID.

        Args:
            reply_id: The reply's unique identifier

        Returns:
            The reply if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_discussion(
        self,
        discussion_id: DiscussionId,
        statuses: Optional[Sequence[ContentStatus]] = None,
    ) -> List[Reply]:
        """Find all replies of a discussion in thread order.

        Replies are returned sorted by reply_path, which is depth-first
        order with siblings in creation order.

        Args:
            discussion_id: The discussion ID
            statuses: Restrict to these statuses (None for all)

        Returns:
            List of replies in thread order
        """
        pass

    @abstractmethod
    async def find_subtree(
        self, discussion_id: DiscussionId, path: ReplyPath
    ) -> List[Reply]:
        """Find the reply at ``path`` and all of its descendants.

        Args:
            discussion_id: The discussion the subtree belongs to
            path: Path of the subtree root

        Returns:
            Subtree replies in thread order, root first
        """
        pass

    @abstractmethod
    async def count_by_discussion(self, discussion_id: DiscussionId) -> int:
        """Count live reply rows of a discussion."""
        pass

    @abstractmethod
    async def save(self, reply: Reply) -> Reply:
        """Insert a new reply.

        Hierarchy fields (reply_level, reply_path) are written once here and
        never changed afterwards.

        Args:
            reply: The reply to insert

        Returns:
            The saved reply
        """
        pass

    @abstractmethod
    async def update_content(
        self, reply_id: ReplyId, content: str, updated_at: datetime
    ) -> Optional[Reply]:
        """Replace reply content and mark it as edited.

        Returns:
            The updated reply, None if it doesn't exist
        """
        pass

    @abstractmethod
    async def delete_many(self, reply_ids: Sequence[ReplyId]) -> int:
        """Hard delete replies.

        Returns:
            Number of rows removed
        """
        pass

    @abstractmethod
    async def increment_child_replies_count(self, reply_id: ReplyId) -> Optional[int]:
        """Increment child_replies_count of a parent reply."""
        pass

    @abstractmethod
    async def decrement_child_replies_count(self, reply_id: ReplyId) -> Optional[int]:
        """Decrement child_replies_count, floored at zero."""
        pass

    @abstractmethod
    async def increment_likes_count(self, reply_id: ReplyId) -> Optional[int]:
        """Increment likes_count of a reply."""
        pass

    @abstractmethod
    async def decrement_likes_count(self, reply_id: ReplyId) -> Optional[int]:
        """Decrement likes_count of a reply, floored at zero."""
        pass
