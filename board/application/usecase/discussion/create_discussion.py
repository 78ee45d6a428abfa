"""Create discussion use case."""

from board.application.usecase.base import ActorRequest, BaseUseCase
from board.domain.service import EngagementStore

from .common import DiscussionResponse, to_discussion_response


class CreateDiscussionRequest(ActorRequest):
    """Create discussion request."""

    title: str
    content: str


class CreateDiscussionUseCase(BaseUseCase):
    """Use case for starting a new discussion."""

    def __init__(self, engagement_store: EngagementStore) -> None:
        """Initialize create discussion use case.

        Args:
            engagement_store: Engagement store domain service
        """
        self.engagement_store = engagement_store

    async def execute(self, request: CreateDiscussionRequest) -> DiscussionResponse:
        """Execute create discussion flow.

        Args:
            request: Create discussion request

        Returns:
            Created discussion

        Raises:
            ValidationError: If title or content length is invalid
        """
        discussion = await self.engagement_store.create_discussion(
            actor=request.actor(),
            title=request.title,
            content=request.content,
        )
        return to_discussion_response(discussion)
