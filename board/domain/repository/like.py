"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Set
from uuid import UUID

from board.domain.model.like import Like
from board.domain.value import ActorId, LikeTargetType, ReactionType


class LikeRepository(ABC):
    """Repository for Like fact rows of both discussions and replies.

    Defines the contract for like persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def save(self, like: Like) -> Like:
        """Insert a like.

        Uniqueness of (target, actor, reaction) is enforced by the store, not
        by a prior lookup.

        Args:
            like: The like to insert

        Returns:
            The saved like

        Raises:
            AlreadyExistsError: If the actor already left this reaction
        """
        pass

    @abstractmethod
    async def delete(
        self,
        target_type: LikeTargetType,
        target_id: UUID,
        actor_id: ActorId,
        reaction: ReactionType,
    ) -> bool:
        """Delete a like by target, actor and reaction.

        Returns:
            True if a like was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_targets(
        self, target_type: LikeTargetType, target_ids: Sequence[UUID]
    ) -> int:
        """Delete every like on the given targets.

        Returns:
            Number of likes removed
        """
        pass

    @abstractmethod
    async def find(
        self,
        target_type: LikeTargetType,
        target_id: UUID,
        actor_id: ActorId,
        reaction: ReactionType,
    ) -> Optional[Like]:
        """Find a single like."""
        pass

    @abstractmethod
    async def find_liked_target_ids(
        self,
        actor_id: ActorId,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> Set[UUID]:
        """Find which targets an actor has reacted to (batch query).

        Any reaction counts.

        Args:
            actor_id: The actor's ID
            target_type: Type of targets (discussion or reply)
            target_ids: IDs of targets to check

        Returns:
            Set of target IDs the actor has at least one like on
        """
        pass

    @abstractmethod
    async def count_by_target(self, target_type: LikeTargetType, target_id: UUID) -> int:
        """Count like rows on a target."""
        pass
