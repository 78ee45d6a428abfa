"""Update reply use case."""

from uuid import UUID

from board.application.usecase.base import ActorRequest, BaseUseCase
from board.domain.service import EngagementStore
from board.domain.value import ReplyId

from .common import ReplyResponse, to_reply_response


class UpdateReplyRequest(ActorRequest):
    """Update reply request."""

    reply_id: str  # UUID string
    content: str


class UpdateReplyUseCase(BaseUseCase):
    """Use case for editing a reply. Only the author can edit."""

    def __init__(self, engagement_store: EngagementStore) -> None:
        """Initialize update reply use case.

        Args:
            engagement_store: Engagement store domain service
        """
        self.engagement_store = engagement_store

    async def execute(self, request: UpdateReplyRequest) -> ReplyResponse:
        """Execute update reply flow.

        Raises:
            ValidationError: If content length is invalid
            NotFoundError: If the reply doesn't exist
            ForbiddenError: If the actor is not the author
        """
        reply = await self.engagement_store.update_reply(
            actor=request.actor(),
            reply_id=ReplyId(UUID(request.reply_id)),
            content=request.content,
        )
        return to_reply_response(reply)
