"""Value object bases."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    """Immutable multi-field value, equal when all fields are equal."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one validated value.

    The wrapped value lives in ``.root`` and ``model_dump()`` returns it
    unwrapped, so API models can embed a ReplyPath or DisplayName directly.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
