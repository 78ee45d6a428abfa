"""Liveness and readiness probes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from board.config import Settings
from board.domain.repository import UnitOfWorkFactory
from board.domain.value import ContentStatus

router = APIRouter(prefix="/health", tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    git_sha: str
    environment: str


class ReadinessResponse(BaseModel):
    status: str
    discussions: int


@router.get("", response_model=HealthResponse)
async def liveness(settings: FromDishka[Settings]) -> HealthResponse:
    """The process is up; does not touch the store."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        git_sha=settings.git_sha,
        environment=settings.environment,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(uow_factory: FromDishka[UnitOfWorkFactory]) -> ReadinessResponse:
    """The store answers queries.

    An unreachable store raises StoreUnavailableError, reported as 503.
    """
    async with uow_factory() as uow:
        discussions = await uow.discussions.count(list(ContentStatus))
    return ReadinessResponse(status="ready", discussions=discussions)
