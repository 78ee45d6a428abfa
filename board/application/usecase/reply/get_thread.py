"""Get thread use case."""

from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase
from board.domain.service import QueryService
from board.domain.value import ActorId, DiscussionId

from .common import ReplyResponse, to_reply_response


class GetThreadRequest(BaseModel):
    """Get thread request."""

    discussion_id: str  # UUID string
    actor_id: str | None = None  # Viewer (if authenticated)


class ThreadReplyItem(ReplyResponse):
    """Reply in a thread with the viewer's like state."""

    viewer_has_liked: bool


class GetThreadResponse(BaseModel):
    """Get thread response."""

    discussion_id: str
    replies: list[ThreadReplyItem]


class GetThreadUseCase(BaseUseCase):
    """Use case for fetching all replies of a discussion in thread order."""

    def __init__(self, query_service: QueryService) -> None:
        """Initialize get thread use case.

        Args:
            query_service: Query domain service
        """
        self.query_service = query_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Replies come back depth-first (each reply followed by its subtree);
        clients rebuild nesting from parent_reply_id or reply_path prefixes.

        Raises:
            NotFoundError: If the discussion is missing, hidden or deleted
        """
        entries = await self.query_service.get_thread(
            DiscussionId(UUID(request.discussion_id)),
            actor_id=ActorId(request.actor_id) if request.actor_id else None,
        )
        return GetThreadResponse(
            discussion_id=request.discussion_id,
            replies=[
                ThreadReplyItem(
                    **to_reply_response(entry.reply).model_dump(),
                    viewer_has_liked=entry.viewer_has_liked,
                )
                for entry in entries
            ],
        )
