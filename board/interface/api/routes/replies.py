"""Reply routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from board.application.usecase.reply import (
    CreateReplyRequest,
    CreateReplyUseCase,
    DeleteReplyRequest,
    DeleteReplyResponse,
    DeleteReplyUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ReplyResponse,
    UpdateReplyRequest,
    UpdateReplyUseCase,
)
from board.interface.api.identity import ActorHeaders, optional_actor_id, require_actor

router = APIRouter(tags=["replies"], route_class=DishkaRoute)


class CreateReplyAPIRequest(BaseModel):
    """API request for creating a reply."""

    content: str
    parent_reply_id: UUID | None = None  # Parent reply ID for nested replies


class UpdateReplyAPIRequest(BaseModel):
    """API request for editing a reply."""

    content: str


@router.post(
    "/discussions/{discussion_id}/replies",
    response_model=ReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    discussion_id: UUID,
    request: CreateReplyAPIRequest,
    create_reply_use_case: FromDishka[CreateReplyUseCase],
    actor: ActorHeaders = Depends(require_actor),
) -> ReplyResponse:
    """Reply to a discussion, or to another reply via parent_reply_id."""
    return await create_reply_use_case.execute(
        CreateReplyRequest(
            actor_id=actor.actor_id,
            actor_name=actor.actor_name,
            discussion_id=str(discussion_id),
            content=request.content,
            parent_reply_id=(
                str(request.parent_reply_id) if request.parent_reply_id else None
            ),
        )
    )


@router.get("/discussions/{discussion_id}/replies", response_model=GetThreadResponse)
async def get_thread(
    discussion_id: UUID,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    actor_id: Optional[str] = Depends(optional_actor_id),
) -> GetThreadResponse:
    """Get every reply of a discussion in thread order.

    If the viewer is identified, includes their like state for each reply.
    """
    return await get_thread_use_case.execute(
        GetThreadRequest(discussion_id=str(discussion_id), actor_id=actor_id)
    )


@router.patch("/replies/{reply_id}", response_model=ReplyResponse)
async def update_reply(
    reply_id: UUID,
    request: UpdateReplyAPIRequest,
    update_reply_use_case: FromDishka[UpdateReplyUseCase],
    actor: ActorHeaders = Depends(require_actor),
) -> ReplyResponse:
    """Edit a reply. Only the author can edit."""
    return await update_reply_use_case.execute(
        UpdateReplyRequest(
            actor_id=actor.actor_id,
            actor_name=actor.actor_name,
            reply_id=str(reply_id),
            content=request.content,
        )
    )


@router.delete("/replies/{reply_id}", response_model=DeleteReplyResponse)
async def delete_reply(
    reply_id: UUID,
    delete_reply_use_case: FromDishka[DeleteReplyUseCase],
    actor: ActorHeaders = Depends(require_actor),
) -> DeleteReplyResponse:
    """Delete a reply with all of its descendants and their likes."""
    return await delete_reply_use_case.execute(
        DeleteReplyRequest(
            actor_id=actor.actor_id,
            actor_name=actor.actor_name,
            reply_id=str(reply_id),
        )
    )
