"""In-memory like repository for testing."""

from typing import Optional, Sequence, Set
from uuid import UUID

from board.domain.error import AlreadyExistsError
from board.domain.model import Like
from board.domain.repository import LikeRepository
from board.domain.value import ActorId, LikeTargetType, ReactionType

from .database import InMemoryTables


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self, tables: InMemoryTables) -> None:
        self._likes = tables.likes

    async def save(self, like: Like) -> Like:
        """Insert a like.

        Raises:
            AlreadyExistsError: If the actor already left this reaction
        """
        existing = await self.find(
            like.target_type, like.target_id, like.actor_id, like.reaction
        )
        if existing:
            raise AlreadyExistsError(
                "Like",
                f"{like.target_type.value}:{like.target_id}:{like.actor_id}:"
                f"{like.reaction.value}",
            )

        self._likes[like.id] = like
        return like

    async def delete(
        self,
        target_type: LikeTargetType,
        target_id: UUID,
        actor_id: ActorId,
        reaction: ReactionType,
    ) -> bool:
        """Delete a like by target, actor and reaction."""
        existing = await self.find(target_type, target_id, actor_id, reaction)
        if existing is None:
            return False
        del self._likes[existing.id]
        return True

    async def delete_by_targets(
        self, target_type: LikeTargetType, target_ids: Sequence[UUID]
    ) -> int:
        """Delete every like on the given targets."""
        targets = set(target_ids)
        doomed = [
            like.id
            for like in self._likes.values()
            if like.target_type == target_type and like.target_id in targets
        ]
        for like_id in doomed:
            del self._likes[like_id]
        return len(doomed)

    async def find(
        self,
        target_type: LikeTargetType,
        target_id: UUID,
        actor_id: ActorId,
        reaction: ReactionType,
    ) -> Optional[Like]:
        """Find a single like."""
        for like in self._likes.values():
            if (
                like.target_type == target_type
                and like.target_id == target_id
                and like.actor_id == actor_id
                and like.reaction == reaction
            ):
                return like
        return None

    async def find_liked_target_ids(
        self,
        actor_id: ActorId,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> Set[UUID]:
        """Find which targets an actor has reacted to."""
        targets = set(target_ids)
        return {
            like.target_id
            for like in self._likes.values()
            if like.actor_id == actor_id
            and like.target_type == target_type
            and like.target_id in targets
        }

    async def count_by_target(self, target_type: LikeTargetType, target_id: UUID) -> int:
        """Count like rows on a target."""
        return sum(
            1
            for like in self._likes.values()
            if like.target_type == target_type and like.target_id == target_id
        )
