"""Shared in-memory store for testing.

Units of work take the lock for their whole lifetime, work on a private
copy of the tables and swap it in on commit, so the in-memory backend has
the same all-or-nothing behaviour as a database transaction.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Dict

from board.domain.model import Discussion, Like, Reply
from board.domain.value import DiscussionId, LikeId, ReplyId


@dataclass
class InMemoryTables:
    """Rows of every relation, keyed by primary key."""

    discussions: Dict[DiscussionId, Discussion] = field(default_factory=dict)
    replies: Dict[ReplyId, Reply] = field(default_factory=dict)
    likes: Dict[LikeId, Like] = field(default_factory=dict)

    def copy(self) -> "InMemoryTables":
        # Rows are frozen models, so copying the dicts is enough
        return InMemoryTables(
            discussions=dict(self.discussions),
            replies=dict(self.replies),
            likes=dict(self.likes),
        )


class InMemoryDatabase:
    """Committed state plus the lock serializing units of work."""

    def __init__(self) -> None:
        self.tables = InMemoryTables()
        self.lock = asyncio.Lock()
