"""Strongly typed identifiers for discussion board entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core engagement entity identifiers
DiscussionId = NewType("DiscussionId", UUID)
ReplyId = NewType("ReplyId", UUID)
LikeId = NewType("LikeId", UUID)

# Opaque actor identifier issued by the external identity provider
ActorId = NewType("ActorId", str)
