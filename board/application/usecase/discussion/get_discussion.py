"""Get discussion use case."""

from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase
from board.domain.service import QueryService
from board.domain.value import ActorId, DiscussionId

from .common import DiscussionResponse, to_discussion_response


class GetDiscussionRequest(BaseModel):
    """Get discussion request."""

    discussion_id: str  # UUID string
    actor_id: str | None = None  # Viewer (if authenticated)


class GetDiscussionResponse(BaseModel):
    """Get discussion response."""

    discussion: DiscussionResponse
    viewer_has_liked: bool


class GetDiscussionUseCase(BaseUseCase):
    """Use case for fetching a single discussion with the viewer's like state."""

    def __init__(self, query_service: QueryService) -> None:
        """Initialize get discussion use case.

        Args:
            query_service: Query domain service
        """
        self.query_service = query_service

    async def execute(self, request: GetDiscussionRequest) -> GetDiscussionResponse:
        """Execute get discussion flow.

        Raises:
            NotFoundError: If the discussion is missing, hidden or deleted
        """
        view = await self.query_service.get_discussion(
            DiscussionId(UUID(request.discussion_id)),
            actor_id=ActorId(request.actor_id) if request.actor_id else None,
        )
        return GetDiscussionResponse(
            discussion=to_discussion_response(view.discussion),
            viewer_has_liked=view.viewer_has_liked,
        )
