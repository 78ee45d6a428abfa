"""PostgreSQL implementation of Like repository."""

from typing import Optional, Sequence, Set
from uuid import UUID

from sqlalchemy import Table, and_, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Like
from board.domain.repository import LikeRepository
from board.domain.value import ActorId, LikeTargetType, ReactionType
from board.persistence.error import translate_integrity_error
from board.persistence.mappers import like_to_dict, row_to_like
from board.persistence.tables import discussion_likes_table, reply_likes_table


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository.

    Discussion likes and reply likes live in two isomorphic tables; the
    target type picks the table.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _table(target_type: LikeTargetType) -> Table:
        if target_type == LikeTargetType.DISCUSSION:
            return discussion_likes_table
        return reply_likes_table

    @staticmethod
    def _target_column(table: Table):
        if table is discussion_likes_table:
            return table.c.discussion_id
        return table.c.reply_id

    async def save(self, like: Like) -> Like:
        """Insert a like.

        The insert runs in a savepoint so a unique violation leaves the
        surrounding transaction usable. A duplicate raises AlreadyExistsError;
        a target deleted concurrently raises NotFoundError.
        """
        table = self._table(like.target_type)
        stmt = insert(table).values(**like_to_dict(like))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise translate_integrity_error(
                e,
                "Like",
                f"{like.target_type.value}:{like.target_id}:{like.actor_id}:"
                f"{like.reaction.value}",
            ) from e
        return like

    async def delete(
        self,
        target_type: LikeTargetType,
        target_id: UUID,
        actor_id: ActorId,
        reaction: ReactionType,
    ) -> bool:
        """Delete a like by target, actor and reaction."""
        table = self._table(target_type)
        stmt = delete(table).where(
            and_(
                self._target_column(table) == target_id,
                table.c.actor_id == actor_id,
                table.c.reaction == reaction.value,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_targets(
        self, target_type: LikeTargetType, target_ids: Sequence[UUID]
    ) -> int:
        """Delete every like on the given targets."""
        if not target_ids:
            return 0

        table = self._table(target_type)
        stmt = delete(table).where(self._target_column(table).in_(target_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def find(
        self,
        target_type: LikeTargetType,
        target_id: UUID,
        actor_id: ActorId,
        reaction: ReactionType,
    ) -> Optional[Like]:
        """Find a single like."""
        table = self._table(target_type)
        stmt = select(table).where(
            and_(
                self._target_column(table) == target_id,
                table.c.actor_id == actor_id,
                table.c.reaction == reaction.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_like(row._asdict(), target_type) if row else None

    async def find_liked_target_ids(
        self,
        actor_id: ActorId,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> Set[UUID]:
        """Find which targets an actor has reacted to (batch query)."""
        if not target_ids:
            return set()

        table = self._table(target_type)
        target_column = self._target_column(table)
        stmt = (
            select(target_column)
            .where(
                and_(
                    table.c.actor_id == actor_id,
                    target_column.in_(target_ids),
                )
            )
            .distinct()
        )
        result = await self.session.execute(stmt)
        return {
            UUID(str(target_id)) for target_id in result.scalars().all()
        }

    async def count_by_target(self, target_type: LikeTargetType, target_id: UUID) -> int:
        """Count like rows on a target."""
        table = self._table(target_type)
        stmt = (
            select(func.count())
            .select_from(table)
            .where(self._target_column(table) == target_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
