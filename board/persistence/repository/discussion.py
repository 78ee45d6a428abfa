"""PostgreSQL implementation of Discussion repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Discussion
from board.domain.repository import DiscussionRepository
from board.domain.value import ContentStatus, DiscussionId, DiscussionSortOrder
from board.persistence.mappers import discussion_to_dict, row_to_discussion
from board.persistence.tables import discussions_table


class PostgresDiscussionRepository(DiscussionRepository):
    """PostgreSQL implementation of DiscussionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Find a discussion by ID."""
        stmt = select(discussions_table).where(discussions_table.c.id == discussion_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_discussion(row._asdict()) if row else None

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
        t = discussions_table
        stmt = select(t).where(t.c.status.in_([s.value for s in statuses]))

        if sort == DiscussionSortOrder.POPULAR:
            score = t.c.likes_count * likes_weight + t.c.replies_count * replies_weight
            order = [desc(score), desc(t.c.last_activity_at)]
        elif sort == DiscussionSortOrder.VIEWS:
            order = [desc(t.c.views_count), desc(t.c.last_activity_at)]
        else:
            order = [desc(t.c.last_activity_at)]

        stmt = (
            stmt.order_by(desc(t.c.is_pinned), *order, t.c.id)
            .limit(limit)
            .offset(offset)
        )

        result = await self.session.execute(stmt)
        return [row_to_discussion(row._asdict()) for row in result.fetchall()]

    async def count(self, statuses: Sequence[ContentStatus]) -> int:
        """Count discussions in the given statuses."""
        stmt = (
            select(func.count())
            .select_from(discussions_table)
            .where(discussions_table.c.status.in_([s.value for s in statuses]))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, discussion: Discussion) -> Discussion:
        """Insert a new discussion."""
        stmt = discussions_table.insert().values(**discussion_to_dict(discussion))
        await self.session.execute(stmt)
        await self.session.flush()
        return discussion

    async def update_content(
        self,
        discussion_id: DiscussionId,
        title: str,
        content: str,
        updated_at: datetime,
    ) -> Optional[Discussion]:
        """Replace title and content of a discussion."""
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(title=title, content=content, updated_at=updated_at)
            .returning(discussions_table)
        )
        return await self._update_returning(stmt)

    async def update_status(
        self,
        discussion_id: DiscussionId,
        status: ContentStatus,
        updated_at: datetime,
    ) -> Optional[Discussion]:
        """Set the moderation status of a discussion."""
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(status=status.value, updated_at=updated_at)
            .returning(discussions_table)
        )
        return await self._update_returning(stmt)

    async def next_reply_seq(self, discussion_id: DiscussionId) -> Optional[int]:
        """Atomically allocate the next thread sequence number."""
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(reply_seq=discussions_table.c.reply_seq + 1)
            .returning(discussions_table.c.reply_seq)
        )
        return await self._scalar(stmt)

    async def increment_replies_count(
        self, discussion_id: DiscussionId, activity_at: datetime
    ) -> Optional[int]:
        """Atomically increment replies_count by 1."""
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(
                replies_count=discussions_table.c.replies_count + 1,
                last_activity_at=func.greatest(
                    discussions_table.c.last_activity_at, activity_at
                ),
            )
            .returning(discussions_table.c.replies_count)
        )
        return await self._scalar(stmt)

    async def decrement_replies_count(
        self, discussion_id: DiscussionId
    ) -> Optional[int]:
        """Atomically decrement replies_count by 1 (minimum 0)."""
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(
                replies_count=func.greatest(0, discussions_table.c.replies_count - 1)
            )
            .returning(discussions_table.c.replies_count)
        )
        return await self._scalar(stmt)

    async def increment_likes_count(
        self, discussion_id: DiscussionId, activity_at: datetime
    ) -> Optional[int]:
        """Atomically increment likes_count by 1."""
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(
                likes_count=discussions_table.c.likes_count + 1,
                last_activity_at=func.greatest(
                    discussions_table.c.last_activity_at, activity_at
                ),
            )
            .returning(discussions_table.c.likes_count)
        )
        return await self._scalar(stmt)

    async def decrement_likes_count(
        self, discussion_id: DiscussionId
    ) -> Optional[int]:
        """Atomically decrement likes_count by 1 (minimum 0)."""
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(likes_count=func.greatest(0, discussions_table.c.likes_count - 1))
            .returning(discussions_table.c.likes_count)
        )
        return await self._scalar(stmt)

    async def increment_views_count(self, discussion_id: DiscussionId) -> bool:
        """Atomically increment views_count by 1."""
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(views_count=discussions_table.c.views_count + 1)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def _scalar(self, stmt) -> Optional[int]:
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _update_returning(self, stmt) -> Optional[Discussion]:
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None
        await self.session.flush()
        return row_to_discussion(row._asdict())
