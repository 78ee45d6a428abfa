"""Discussion routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel

from board.application.usecase.discussion import (
    CreateDiscussionRequest,
    CreateDiscussionUseCase,
    DeleteDiscussionRequest,
    DeleteDiscussionUseCase,
    DiscussionResponse,
    GetDiscussionRequest,
    GetDiscussionResponse,
    GetDiscussionUseCase,
    ListDiscussionsRequest,
    ListDiscussionsResponse,
    ListDiscussionsUseCase,
    RecordViewRequest,
    RecordViewUseCase,
    UpdateDiscussionRequest,
    UpdateDiscussionUseCase,
)
from board.domain.value import DiscussionSortOrder
from board.interface.api.identity import ActorHeaders, optional_actor_id, require_actor

router = APIRouter(prefix="/discussions", tags=["discussions"], route_class=DishkaRoute)


class CreateDiscussionAPIRequest(BaseModel):
    """API request for creating a discussion.

    Length limits are enforced by the domain so every caller gets the same
    validation errors.
    """

    title: str
    content: str


class UpdateDiscussionAPIRequest(BaseModel):
    """API request for editing a discussion."""

    title: str | None = None
    content: str | None = None


@router.post(
    "",
    response_model=DiscussionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_discussion(
    request: CreateDiscussionAPIRequest,
    create_discussion_use_case: FromDishka[CreateDiscussionUseCase],
    actor: ActorHeaders = Depends(require_actor),
) -> DiscussionResponse:
    """Start a new discussion.

    Requires the gateway identity headers.
    """
    return await create_discussion_use_case.execute(
        CreateDiscussionRequest(
            actor_id=actor.actor_id,
            actor_name=actor.actor_name,
            title=request.title,
            content=request.content,
        )
    )


@router.get("", response_model=ListDiscussionsResponse)
async def list_discussions(
    list_discussions_use_case: FromDishka[ListDiscussionsUseCase],
    sort: DiscussionSortOrder = Query(default=DiscussionSortOrder.RECENT),
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
) -> ListDiscussionsResponse:
    """List visible discussions, pinned first.

    Args:
        sort: recent, popular or views
        limit: Page size (capped by configuration)
        offset: Number of discussions to skip
    """
    return await list_discussions_use_case.execute(
        ListDiscussionsRequest(sort=sort, limit=limit, offset=offset)
    )


@router.get("/{discussion_id}", response_model=GetDiscussionResponse)
async def get_discussion(
    discussion_id: UUID,
    get_discussion_use_case: FromDishka[GetDiscussionUseCase],
    actor_id: Optional[str] = Depends(optional_actor_id),
) -> GetDiscussionResponse:
    """Get a discussion and whether the viewer has liked it."""
    return await get_discussion_use_case.execute(
        GetDiscussionRequest(discussion_id=str(discussion_id), actor_id=actor_id)
    )


@router.patch("/{discussion_id}", response_model=DiscussionResponse)
async def update_discussion(
    discussion_id: UUID,
    request: UpdateDiscussionAPIRequest,
    update_discussion_use_case: FromDishka[UpdateDiscussionUseCase],
    actor: ActorHeaders = Depends(require_actor),
) -> DiscussionResponse:
    """Edit title and/or content. Only the author can edit."""
    return await update_discussion_use_case.execute(
        UpdateDiscussionRequest(
            actor_id=actor.actor_id,
            actor_name=actor.actor_name,
            discussion_id=str(discussion_id),
            title=request.title,
            content=request.content,
        )
    )


@router.delete("/{discussion_id}", response_model=DiscussionResponse)
async def delete_discussion(
    discussion_id: UUID,
    delete_discussion_use_case: FromDishka[DeleteDiscussionUseCase],
    actor: ActorHeaders = Depends(require_actor),
) -> DiscussionResponse:
    """Soft delete a discussion. Only the author can delete."""
    return await delete_discussion_use_case.execute(
        DeleteDiscussionRequest(
            actor_id=actor.actor_id,
            actor_name=actor.actor_name,
            discussion_id=str(discussion_id),
        )
    )


@router.post("/{discussion_id}/views", status_code=status.HTTP_204_NO_CONTENT)
async def record_view(
    discussion_id: UUID,
    record_view_use_case: FromDishka[RecordViewUseCase],
) -> Response:
    """Count a view. Best-effort; always succeeds."""
    await record_view_use_case.execute(
        RecordViewRequest(discussion_id=str(discussion_id))
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
