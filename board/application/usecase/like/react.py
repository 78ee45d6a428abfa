"""React use case (like, unlike, toggle)."""

from enum import Enum
from uuid import UUID

import logfire
from pydantic import BaseModel

from board.application.usecase.base import ActorRequest, BaseUseCase
from board.domain.service import EngagementStore
from board.domain.value import LikeTargetType, ReactionType


class ReactAction(str, Enum):
    """What to do with the reaction."""

    SET = "set"
    CLEAR = "clear"
    TOGGLE = "toggle"


class ReactRequest(ActorRequest):
    """React request."""

    action: ReactAction
    target_type: LikeTargetType
    target_id: str  # UUID string
    reaction: ReactionType = ReactionType.LIKE


class ReactResponse(BaseModel):
    """React response."""

    target_type: LikeTargetType
    target_id: str
    reaction: ReactionType
    liked: bool
    likes_count: int


class ReactUseCase(BaseUseCase):
    """Use case for leaving or retracting a reaction on a discussion or reply.

    Set and clear are idempotent; toggle flips the current state.
    """

    def __init__(self, engagement_store: EngagementStore) -> None:
        """Initialize react use case.

        Args:
            engagement_store: Engagement store domain service
        """
        self.engagement_store = engagement_store

    async def execute(self, request: ReactRequest) -> ReactResponse:
        """Execute react flow.

        Raises:
            NotFoundError: If the target doesn't exist or is not visible
        """
        operations = {
            ReactAction.SET: self.engagement_store.set_like,
            ReactAction.CLEAR: self.engagement_store.clear_like,
            ReactAction.TOGGLE: self.engagement_store.toggle_like,
        }
        state = await operations[request.action](
            actor=request.actor(),
            target_type=request.target_type,
            target_id=UUID(request.target_id),
            reaction=request.reaction,
        )
        logfire.info(
            "Reaction applied",
            action=request.action.value,
            target_type=state.target_type.value,
            liked=state.liked,
        )
        return ReactResponse(
            target_type=state.target_type,
            target_id=str(state.target_id),
            reaction=state.reaction,
            liked=state.liked,
            likes_count=state.likes_count,
        )
