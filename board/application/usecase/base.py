"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from board.domain.value import Actor, ActorId, DisplayName


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class ActorRequest(BaseModel):
    """Request made on behalf of an authenticated actor."""

    actor_id: str  # Opaque ID from the identity provider
    actor_name: str  # Display name from the identity provider

    def actor(self) -> Actor:
        """Build the domain actor."""
        return Actor(
            actor_id=ActorId(self.actor_id),
            display_name=DisplayName(self.actor_name),
        )
