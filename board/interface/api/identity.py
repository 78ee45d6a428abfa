"""Actor identity from gateway headers.

The upstream gateway authenticates the caller and forwards the identity
provider's actor ID and display name as request headers. The API trusts
them as given.
"""

from typing import Optional

from fastapi import Header
from pydantic import BaseModel

from board.interface.error import AuthenticationRequiredError

ACTOR_ID_HEADER = "X-Actor-Id"
ACTOR_NAME_HEADER = "X-Actor-Name"
MAX_DISPLAY_NAME_LENGTH = 255


class ActorHeaders(BaseModel):
    """Identity forwarded by the gateway."""

    actor_id: str
    actor_name: str


def optional_actor_id(
    x_actor_id: Optional[str] = Header(default=None),
) -> Optional[str]:
    """Viewer ID for read endpoints (None for anonymous)."""
    return x_actor_id or None


def require_actor(
    x_actor_id: Optional[str] = Header(default=None),
    x_actor_name: Optional[str] = Header(default=None),
) -> ActorHeaders:
    """Identity for write endpoints.

    Raises:
        AuthenticationRequiredError: If either header is missing or blank
    """
    if not x_actor_id or not x_actor_id.strip():
        raise AuthenticationRequiredError(f"{ACTOR_ID_HEADER} header is required")
    if (
        not x_actor_name
        or not x_actor_name.strip()
        or len(x_actor_name) > MAX_DISPLAY_NAME_LENGTH
    ):
        raise AuthenticationRequiredError(
            f"{ACTOR_NAME_HEADER} header must be 1-{MAX_DISPLAY_NAME_LENGTH} characters"
        )
    return ActorHeaders(actor_id=x_actor_id, actor_name=x_actor_name)
