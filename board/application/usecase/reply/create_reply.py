"""Create reply use case."""

from uuid import UUID

from board.application.usecase.base import ActorRequest, BaseUseCase
from board.domain.service import EngagementStore
from board.domain.value import DiscussionId, ReplyId

from .common import ReplyResponse, to_reply_response


class CreateReplyRequest(ActorRequest):
    """Create reply request."""

    discussion_id: str  # UUID string
    content: str
    parent_reply_id: str | None = None  # Parent reply ID for nested replies


class CreateReplyUseCase(BaseUseCase):
    """Use case for replying to a discussion or to another reply."""

    def __init__(self, engagement_store: EngagementStore) -> None:
        """Initialize create reply use case.

        Args:
            engagement_store: Engagement store domain service
        """
        self.engagement_store = engagement_store

    async def execute(self, request: CreateReplyRequest) -> ReplyResponse:
        """Execute create reply flow.

        Args:
            request: Create reply request

        Returns:
            Created reply with level and path

        Raises:
            ValidationError: If content length is invalid
            NotFoundError: If the discussion or parent reply is unavailable
            DepthExceededError: If the reply would nest too deep
        """
        parent_reply_id = (
            ReplyId(UUID(request.parent_reply_id)) if request.parent_reply_id else None
        )
        reply = await self.engagement_store.create_reply(
            actor=request.actor(),
            discussion_id=DiscussionId(UUID(request.discussion_id)),
            content=request.content,
            parent_reply_id=parent_reply_id,
        )
        return to_reply_response(reply)
