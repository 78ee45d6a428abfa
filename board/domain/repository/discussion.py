"""Discussion repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from board.domain.model.discussion import Discussion
from board.domain.value import ContentStatus, DiscussionId, DiscussionSortOrder


class DiscussionRepository(ABC):
    """Repository for Discussion aggregate.

    Defines the contract for discussion persistence operations.
    Implementations live in the infrastructure layer.

    Counter methods apply a single atomic adjustment and return the new value,
    or None if the discussion does not exist. Decrements never go below zero.
    """

    @abstractmethod
    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Find a discussion by ID.

        Args:
            discussion_id: The discussion's unique identifier

        Returns:
            The discussion if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        statuses: Sequence[ContentStatus],
        sort: DiscussionSortOrder = DiscussionSortOrder.RECENT,
        limit: int = 20,
        offset: int = 0,
        likes_weight: int = 1,
        replies_weight: int = 2,
    ) -> List[Discussion]:
        """Find discussions with sorting and pagination.

        Pinned discussions always come first. Within each group the sort key
        applies, with ties broken by most recent activity.

        Args:
            statuses: Only discussions in one of these statuses are returned
            sort: Sort order (recent, popular, views)
            limit: Maximum number of discussions to return
            offset: Number of discussions to skip
            likes_weight: Weight of likes_count in the popular score
            replies_weight: Weight of replies_count in the popular score

        Returns:
            List of discussions
        """
        pass

    @abstractmethod
    async def count(self, statuses: Sequence[ContentStatus]) -> int:
        """Count discussions in the given statuses."""
        pass

    @abstractmethod
    async def save(self, discussion: Discussion) -> Discussion:
        """Insert a new discussion.

        Args:
            discussion: The discussion to insert

        Returns:
            The saved discussion
        """
        pass

    @abstractmethod
    async def update_content(
        self,
        discussion_id: DiscussionId,
        title: str,
        content: str,
        updated_at: datetime,
    ) -> Optional[Discussion]:
        """Replace title and content of a discussion.

        Returns:
            The updated discussion, None if it doesn't exist
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        discussion_id: DiscussionId,
        status: ContentStatus,
        updated_at: datetime,
    ) -> Optional[Discussion]:
        """Set the moderation status of a discussion.

        Returns:
            The updated discussion, None if it doesn't exist
        """
        pass

    @abstractmethod
    async def next_reply_seq(self, discussion_id: DiscussionId) -> Optional[int]:
        """Atomically allocate the next thread sequence number.

        The allocation takes a row lock on the discussion for the rest of the
        transaction, so sequence numbers are unique within a discussion.

        Returns:
            The allocated sequence number, None if the discussion doesn't exist
        """
        pass

    @abstractmethod
    async def increment_replies_count(
        self, discussion_id: DiscussionId, activity_at: datetime
    ) -> Optional[int]:
        """Increment replies_count and advance last_activity_at."""
        pass

    @abstractmethod
    async def decrement_replies_count(
        self, discussion_id: DiscussionId
    ) -> Optional[int]:
        """Decrement replies_count, floored at zero."""
        pass

    @abstractmethod
    async def increment_likes_count(
        self, discussion_id: DiscussionId, activity_at: datetime
    ) -> Optional[int]:
        """Increment likes_count and advance last_activity_at."""
        pass

    @abstractmethod
    async def decrement_likes_count(
        self, discussion_id: DiscussionId
    ) -> Optional[int]:
        """Decrement likes_count, floored at zero."""
        pass

    @abstractmethod
    async def increment_views_count(self, discussion_id: DiscussionId) -> bool:
        """Increment views_count.

        Returns:
            True if a discussion was updated, False if it doesn't exist
        """
        pass
