"""Delete reply use case."""

from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.base import ActorRequest, BaseUseCase
from board.domain.service import EngagementStore
from board.domain.value import ReplyId


class DeleteReplyRequest(ActorRequest):
    """Delete reply request."""

    reply_id: str  # UUID string


class DeleteReplyResponse(BaseModel):
    """Delete reply response."""

    reply_id: str
    deleted_count: int  # The reply plus all of its descendants


class DeleteReplyUseCase(BaseUseCase):
    """Use case for deleting a reply and its whole subtree."""

    def __init__(self, engagement_store: EngagementStore) -> None:
        """Initialize delete reply use case.

        Args:
            engagement_store: Engagement store domain service
        """
        self.engagement_store = engagement_store

    async def execute(self, request: DeleteReplyRequest) -> DeleteReplyResponse:
        """Execute delete reply flow.

        Raises:
            NotFoundError: If the reply doesn't exist
            ForbiddenError: If the actor is not the author
        """
        deleted = await self.engagement_store.delete_reply(
            actor=request.actor(),
            reply_id=ReplyId(UUID(request.reply_id)),
        )
        return DeleteReplyResponse(reply_id=request.reply_id, deleted_count=deleted)
