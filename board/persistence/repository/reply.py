"""PostgreSQL implementation of Reply repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Reply
from board.domain.repository import ReplyRepository
from board.domain.value import ContentStatus, DiscussionId, ReplyId, ReplyPath
from board.domain.value.types import PATH_SEPARATOR
from board.persistence.mappers import reply_to_dict, row_to_reply
from board.persistence.tables import PATH_COLLATION, discussion_replies_table


class PostgresReplyRepository(ReplyRepository):
    """PostgreSQL implementation of ReplyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        stmt = select(discussion_replies_table).where(
            discussion_replies_table.c.id == reply_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reply(row._asdict()) if row else None

    async def find_by_discussion(
        self,
        discussion_id: DiscussionId,
        statuses: Optional[Sequence[ContentStatus]] = None,
    ) -> List[Reply]:
        """Find all replies of a discussion in thread order."""
        t = discussion_replies_table
        stmt = select(t).where(t.c.discussion_id == discussion_id)

        if statuses is not None:
            stmt = stmt.where(t.c.status.in_([s.value for s in statuses]))

        # Order by path for proper tree structure
        stmt = stmt.order_by(t.c.reply_path.collate(PATH_COLLATION))

        result = await self.session.execute(stmt)
        return [row_to_reply(row._asdict()) for row in result.fetchall()]

    async def find_subtree(
        self, discussion_id: DiscussionId, path: ReplyPath
    ) -> List[Reply]:
        """Find the reply at ``path`` and all of its descendants."""
        t = discussion_replies_table
        encoded = path.encode()
        # Encoded paths contain only digits and separators, so no escaping
        stmt = (
            select(t)
            .where(t.c.discussion_id == discussion_id)
            .where(
                or_(
                    t.c.reply_path == encoded,
                    t.c.reply_path.like(f"{encoded}{PATH_SEPARATOR}%"),
                )
            )
            .order_by(t.c.reply_path.collate(PATH_COLLATION))
        )
        result = await self.session.execute(stmt)
        return [row_to_reply(row._asdict()) for row in result.fetchall()]

    async def count_by_discussion(self, discussion_id: DiscussionId) -> int:
        """Count live reply rows of a discussion."""
        stmt = (
            select(func.count())
            .select_from(discussion_replies_table)
            .where(discussion_replies_table.c.discussion_id == discussion_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, reply: Reply) -> Reply:
        """Insert a new reply."""
        stmt = discussion_replies_table.insert().values(**reply_to_dict(reply))
        await self.session.execute(stmt)
        await self.session.flush()
        return reply

    async def update_content(
        self, reply_id: ReplyId, content: str, updated_at: datetime
    ) -> Optional[Reply]:
        """Replace reply content and mark it as edited."""
        stmt = (
            update(discussion_replies_table)
            .where(discussion_replies_table.c.id == reply_id)
            .values(content=content, is_edited=True, updated_at=updated_at)
            .returning(discussion_replies_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_reply(row._asdict())

    async def delete_many(self, reply_ids: Sequence[ReplyId]) -> int:
        """Hard delete replies."""
        if not reply_ids:
            return 0

        stmt = delete(discussion_replies_table).where(
            discussion_replies_table.c.id.in_(reply_ids)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def increment_child_replies_count(self, reply_id: ReplyId) -> Optional[int]:
        """Atomically increment child_replies_count by 1."""
        t = discussion_replies_table
        stmt = (
            update(t)
            .where(t.c.id == reply_id)
            .values(child_replies_count=t.c.child_replies_count + 1)
            .returning(t.c.child_replies_count)
        )
        return await self._scalar(stmt)

    async def decrement_child_replies_count(self, reply_id: ReplyId) -> Optional[int]:
        """Atomically decrement child_replies_count by 1 (minimum 0)."""
        t = discussion_replies_table
        stmt = (
            update(t)
            .where(t.c.id == reply_id)
            .values(child_replies_count=func.greatest(0, t.c.child_replies_count - 1))
            .returning(t.c.child_replies_count)
        )
        return await self._scalar(stmt)

    async def increment_likes_count(self, reply_id: ReplyId) -> Optional[int]:
        """Atomically increment likes_count by 1."""
        t = discussion_replies_table
        stmt = (
            update(t)
            .where(t.c.id == reply_id)
            .values(likes_count=t.c.likes_count + 1)
            .returning(t.c.likes_count)
        )
        return await self._scalar(stmt)

    async def decrement_likes_count(self, reply_id: ReplyId) -> Optional[int]:
        """Atomically decrement likes_count by 1 (minimum 0)."""
        t = discussion_replies_table
        stmt = (
            update(t)
            .where(t.c.id == reply_id)
            .values(likes_count=func.greatest(0, t.c.likes_count - 1))
            .returning(t.c.likes_count)
        )
        return await self._scalar(stmt)

    async def _scalar(self, stmt) -> Optional[int]:
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
