"""Delete discussion use case."""

from uuid import UUID

from board.application.usecase.base import ActorRequest, BaseUseCase
from board.domain.service import EngagementStore
from board.domain.value import DiscussionId

from .common import DiscussionResponse, to_discussion_response


class DeleteDiscussionRequest(ActorRequest):
    """Delete discussion request."""

    discussion_id: str  # UUID string


class DeleteDiscussionUseCase(BaseUseCase):
    """Use case for soft deleting a discussion. Only the author can delete."""

    def __init__(self, engagement_store: EngagementStore) -> None:
        """Initialize delete discussion use case.

        Args:
            engagement_store: Engagement store domain service
        """
        self.engagement_store = engagement_store

    async def execute(self, request: DeleteDiscussionRequest) -> DiscussionResponse:
        """Execute delete discussion flow.

        Returns:
            The discussion with status deleted

        Raises:
            NotFoundError: If the discussion doesn't exist
            ForbiddenError: If the actor is not the author
        """
        discussion = await self.engagement_store.delete_discussion(
            actor=request.actor(),
            discussion_id=DiscussionId(UUID(request.discussion_id)),
        )
        return to_discussion_response(discussion)
