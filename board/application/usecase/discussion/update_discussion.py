"""Update discussion use case."""

from uuid import UUID

from board.application.usecase.base import ActorRequest, BaseUseCase
from board.domain.service import EngagementStore
from board.domain.value import DiscussionId

from .common import DiscussionResponse, to_discussion_response


class UpdateDiscussionRequest(ActorRequest):
    """Update discussion request."""

    discussion_id: str  # UUID string
    title: str | None = None
    content: str | None = None


class UpdateDiscussionUseCase(BaseUseCase):
    """Use case for editing a discussion. Only the author can edit."""

    def __init__(self, engagement_store: EngagementStore) -> None:
        """Initialize update discussion use case.

        Args:
            engagement_store: Engagement store domain service
        """
        self.engagement_store = engagement_store

    async def execute(self, request: UpdateDiscussionRequest) -> DiscussionResponse:
        """Execute update discussion flow.

        Raises:
            ValidationError: If nothing to update or lengths are invalid
            NotFoundError: If the discussion doesn't exist
            ForbiddenError: If the actor is not the author
            ContentDeletedError: If the discussion was deleted
        """
        discussion = await self.engagement_store.update_discussion(
            actor=request.actor(),
            discussion_id=DiscussionId(UUID(request.discussion_id)),
            title=request.title,
            content=request.content,
        )
        return to_discussion_response(discussion)
