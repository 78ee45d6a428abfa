"""In-memory discussion repository for testing."""

from datetime import datetime
from typing import List, Optional, Sequence

from board.domain.model import Discussion
from board.domain.repository import DiscussionRepository
from board.domain.value import ContentStatus, DiscussionId, DiscussionSortOrder

from .database import InMemoryTables


class InMemoryDiscussionRepository(DiscussionRepository):
    """In-memory implementation of DiscussionRepository for testing."""

    def __init__(self, tables: InMemoryTables) -> None:
        self._discussions = tables.discussions

    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Find a discussion by ID."""
        return self._discussions.get(discussion_id)

    async def find_all(
        self,
        statuses: Sequence[ContentStatus],
        sort: DiscussionSortOrder = DiscussionSortOrder.RECENT,
        limit: int = 20,
        offset: int = 0,
        likes_weight: int = 1,
        replies_weight: int = 2,
    ) -> List[Discussion]:
        """Find discussions with sorting and pagination."""
        discussions = [d for d in self._discussions.values() if d.status in statuses]

        # Stable sorts, least significant key first
        discussions.sort(key=lambda d: str(d.id))
        discussions.sort(key=lambda d: d.last_activity_at, reverse=True)
        if sort == DiscussionSortOrder.POPULAR:
            discussions.sort(
                key=lambda d: d.likes_count * likes_weight
                + d.replies_count * replies_weight,
                reverse=True,
            )
        elif sort == DiscussionSortOrder.VIEWS:
            discussions.sort(key=lambda d: d.views_count, reverse=True)
        discussions.sort(key=lambda d: d.is_pinned, reverse=True)

        return discussions[offset : offset + limit]

    async def count(self, statuses: Sequence[ContentStatus]) -> int:
        """Count discussions in the given statuses."""
        return sum(1 for d in self._discussions.values() if d.status in statuses)

    async def save(self, discussion: Discussion) -> Discussion:
        """Insert a new discussion."""
        self._discussions[discussion.id] = discussion
        return discussion

    async def update_content(
        self,
        discussion_id: DiscussionId,
        title: str,
        content: str,
        updated_at: datetime,
    ) -> Optional[Discussion]:
        """Replace title and content of a discussion."""
        return self._update(
            discussion_id, title=title, content=content, updated_at=updated_at
        )

    async def update_status(
        self,
        discussion_id: DiscussionId,
        status: ContentStatus,
        updated_at: datetime,
    ) -> Optional[Discussion]:
        """Set the moderation status of a discussion."""
        return self._update(discussion_id, status=status, updated_at=updated_at)

    async def next_reply_seq(self, discussion_id: DiscussionId) -> Optional[int]:
        """Allocate the next thread sequence number."""
        discussion = self._discussions.get(discussion_id)
        if discussion is None:
            return None
        return self._update(discussion_id, reply_seq=discussion.reply_seq + 1).reply_seq

    async def increment_replies_count(
        self, discussion_id: DiscussionId, activity_at: datetime
    ) -> Optional[int]:
        """Increment replies_count by 1."""
        discussion = self._discussions.get(discussion_id)
        if discussion is None:
            return None
        return self._update(
            discussion_id,
            replies_count=discussion.replies_count + 1,
            last_activity_at=max(discussion.last_activity_at, activity_at),
        ).replies_count

    async def decrement_replies_count(
        self, discussion_id: DiscussionId
    ) -> Optional[int]:
        """Decrement replies_count by 1 (minimum 0)."""
        discussion = self._discussions.get(discussion_id)
        if discussion is None:
            return None
        return self._update(
            discussion_id, replies_count=max(0, discussion.replies_count - 1)
        ).replies_count

    async def increment_likes_count(
        self, discussion_id: DiscussionId, activity_at: datetime
    ) -> Optional[int]:
        """Increment likes_count by 1."""
        discussion = self._discussions.get(discussion_id)
        if discussion is None:
            return None
        return self._update(
            discussion_id,
            likes_count=discussion.likes_count + 1,
            last_activity_at=max(discussion.last_activity_at, activity_at),
        ).likes_count

    async def decrement_likes_count(
        self, discussion_id: DiscussionId
    ) -> Optional[int]:
        """Decrement likes_count by 1 (minimum 0)."""
        discussion = self._discussions.get(discussion_id)
        if discussion is None:
            return None
        return self._update(
            discussion_id, likes_count=max(0, discussion.likes_count - 1)
        ).likes_count

    async def increment_views_count(self, discussion_id: DiscussionId) -> bool:
        """Increment views_count by 1."""
        discussion = self._discussions.get(discussion_id)
        if discussion is None:
            return False
        self._update(discussion_id, views_count=discussion.views_count + 1)
        return True

    def _update(self, discussion_id: DiscussionId, **changes) -> Optional[Discussion]:
        discussion = self._discussions.get(discussion_id)
        if discussion is None:
            return None
        updated = discussion.model_copy(update=changes)
        self._discussions[discussion_id] = updated
        return updated
