"""Entity base and clock helper."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Immutable entity snapshot.

    Changes produce a new instance via ``model_copy(update=...)``; the stored
    row stays the source of truth for counters.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
