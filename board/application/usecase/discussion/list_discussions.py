"""List discussions use case."""

import logfire
from pydantic import BaseModel, Field

from board.application.usecase.base import BaseUseCase
from board.domain.service import QueryService
from board.domain.value import DiscussionSortOrder

from .common import DiscussionResponse, to_discussion_response


class ListDiscussionsRequest(BaseModel):
    """List discussions request."""

    sort: DiscussionSortOrder = DiscussionSortOrder.RECENT
    limit: int | None = Field(default=None, ge=1)  # None for the configured default
    offset: int = Field(default=0, ge=0)


class ListDiscussionsResponse(BaseModel):
    """List discussions response."""

    discussions: list[DiscussionResponse]
    total: int
    limit: int
    offset: int


class ListDiscussionsUseCase(BaseUseCase):
    """Use case for listing discussions with sorting and pagination."""

    def __init__(self, query_service: QueryService) -> None:
        """Initialize list discussions use case.

        Args:
            query_service: Query domain service
        """
        self.query_service = query_service

    async def execute(self, request: ListDiscussionsRequest) -> ListDiscussionsResponse:
        """Execute list discussions flow.

        Args:
            request: List request with sort and pagination

        Returns:
            Page of discussions, pinned first
        """
        page = await self.query_service.list_discussions(
            sort=request.sort, limit=request.limit, offset=request.offset
        )
        logfire.info("Discussions listed", count=len(page.items), total=page.total)

        return ListDiscussionsResponse(
            discussions=[to_discussion_response(d) for d in page.items],
            total=page.total,
            limit=page.limit,
            offset=page.offset,
        )
