"""Record view use case."""

from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase
from board.domain.service import EngagementStore
from board.domain.value import DiscussionId


class RecordViewRequest(BaseModel):
    """Record view request."""

    discussion_id: str  # UUID string


class RecordViewUseCase(BaseUseCase):
    """Use case for counting a discussion view (best-effort)."""

    def __init__(self, engagement_store: EngagementStore) -> None:
        """Initialize record view use case.

        Args:
            engagement_store: Engagement store domain service
        """
        self.engagement_store = engagement_store

    async def execute(self, request: RecordViewRequest) -> None:
        """Execute record view flow. Never fails on store errors."""
        await self.engagement_store.record_view(
            DiscussionId(UUID(request.discussion_id))
        )
