"""Like routes.

PUT and DELETE are idempotent: repeating either leaves the same state.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query

from board.application.usecase.like import (
    ReactAction,
    ReactRequest,
    ReactResponse,
    ReactUseCase,
)
from board.domain.value import LikeTargetType, ReactionType
from board.interface.api.identity import ActorHeaders, require_actor

router = APIRouter(tags=["likes"], route_class=DishkaRoute)


async def _react(
    use_case: ReactUseCase,
    actor: ActorHeaders,
    action: ReactAction,
    target_type: LikeTargetType,
    target_id: UUID,
    reaction: ReactionType,
) -> ReactResponse:
    return await use_case.execute(
        ReactRequest(
            actor_id=actor.actor_id,
            actor_name=actor.actor_name,
            action=action,
            target_type=target_type,
            target_id=str(target_id),
            reaction=reaction,
        )
    )


@router.put("/discussions/{discussion_id}/likes", response_model=ReactResponse)
async def like_discussion(
    discussion_id: UUID,
    react_use_case: FromDishka[ReactUseCase],
    reaction: ReactionType = Query(default=ReactionType.LIKE),
    actor: ActorHeaders = Depends(require_actor),
) -> ReactResponse:
    """Leave a reaction on a discussion."""
    return await _react(
        react_use_case,
        actor,
        ReactAction.SET,
        LikeTargetType.DISCUSSION,
        discussion_id,
        reaction,
    )


@router.delete("/discussions/{discussion_id}/likes", response_model=ReactResponse)
async def unlike_discussion(
    discussion_id: UUID,
    react_use_case: FromDishka[ReactUseCase],
    reaction: ReactionType = Query(default=ReactionType.LIKE),
    actor: ActorHeaders = Depends(require_actor),
) -> ReactResponse:
    """Retract a reaction from a discussion."""
    return await _react(
        react_use_case,
        actor,
        ReactAction.CLEAR,
        LikeTargetType.DISCUSSION,
        discussion_id,
        reaction,
    )


@router.post("/discussions/{discussion_id}/likes/toggle", response_model=ReactResponse)
async def toggle_discussion_like(
    discussion_id: UUID,
    react_use_case: FromDishka[ReactUseCase],
    reaction: ReactionType = Query(default=ReactionType.LIKE),
    actor: ActorHeaders = Depends(require_actor),
) -> ReactResponse:
    """Flip a reaction on a discussion."""
    return await _react(
        react_use_case,
        actor,
        ReactAction.TOGGLE,
        LikeTargetType.DISCUSSION,
        discussion_id,
        reaction,
    )


@router.put("/replies/{reply_id}/likes", response_model=ReactResponse)
async def like_reply(
    reply_id: UUID,
    react_use_case: FromDishka[ReactUseCase],
    reaction: ReactionType = Query(default=ReactionType.LIKE),
    actor: ActorHeaders = Depends(require_actor),
) -> ReactResponse:
    """Leave a reaction on a reply."""
    return await _react(
        react_use_case, actor, ReactAction.SET, LikeTargetType.REPLY, reply_id, reaction
    )


@router.delete("/replies/{reply_id}/likes", response_model=ReactResponse)
async def unlike_reply(
    reply_id: UUID,
    react_use_case: FromDishka[ReactUseCase],
    reaction: ReactionType = Query(default=ReactionType.LIKE),
    actor: ActorHeaders = Depends(require_actor),
) -> ReactResponse:
    """Retract a reaction from a reply."""
    return await _react(
        react_use_case,
        actor,
        ReactAction.CLEAR,
        LikeTargetType.REPLY,
        reply_id,
        reaction,
    )


@router.post("/replies/{reply_id}/likes/toggle", response_model=ReactResponse)
async def toggle_reply_like(
    reply_id: UUID,
    react_use_case: FromDishka[ReactUseCase],
    reaction: ReactionType = Query(default=ReactionType.LIKE),
    actor: ActorHeaders = Depends(require_actor),
) -> ReactResponse:
    """Flip a reaction on a reply."""
    return await _react(
        react_use_case,
        actor,
        ReactAction.TOGGLE,
        LikeTargetType.REPLY,
        reply_id,
        reaction,
    )
