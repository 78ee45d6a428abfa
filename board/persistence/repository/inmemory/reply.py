"""In-memory reply repository for testing."""

from datetime import datetime
from typing import List, Optional, Sequence

from board.domain.model import Reply
from board.domain.repository import ReplyRepository
from board.domain.value import ContentStatus, DiscussionId, ReplyId, ReplyPath

from .database import InMemoryTables


class InMemoryReplyRepository(ReplyRepository):
    """In-memory implementation of ReplyRepository for testing."""

    def __init__(self, tables: InMemoryTables) -> None:
        self._replies = tables.replies

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        return self._replies.get(reply_id)

    async def find_by_discussion(
        self,
        discussion_id: DiscussionId,
        statuses: Optional[Sequence[ContentStatus]] = None,
    ) -> List[Reply]:
        """Find all replies of a discussion in thread order."""
        replies = [r for r in self._replies.values() if r.discussion_id == discussion_id]

        if statuses is not None:
            replies = [r for r in replies if r.status in statuses]

        # Sort by path (tree order)
        replies.sort(key=lambda r: r.reply_path.root)
        return replies

    async def find_subtree(
        self, discussion_id: DiscussionId, path: ReplyPath
    ) -> List[Reply]:
        """Find the reply at ``path`` and all of its descendants."""
        replies = [
            r
            for r in self._replies.values()
            if r.discussion_id == discussion_id
            and (r.reply_path == path or path.is_ancestor_of(r.reply_path))
        ]
        replies.sort(key=lambda r: r.reply_path.root)
        return replies

    async def count_by_discussion(self, discussion_id: DiscussionId) -> int:
        """Count live reply rows of a discussion."""
        return sum(1 for r in self._replies.values() if r.discussion_id == discussion_id)

    async def save(self, reply: Reply) -> Reply:
        """Insert a new reply."""
        self._replies[reply.id] = reply
        return reply

    async def update_content(
        self, reply_id: ReplyId, content: str, updated_at: datetime
    ) -> Optional[Reply]:
        """Replace reply content and mark it as edited."""
        return self._update(
            reply_id, content=content, is_edited=True, updated_at=updated_at
        )

    async def delete_many(self, reply_ids: Sequence[ReplyId]) -> int:
        """Hard delete replies."""
        deleted = 0
        for reply_id in reply_ids:
            if self._replies.pop(reply_id, None) is not None:
                deleted += 1
        return deleted

    async def increment_child_replies_count(self, reply_id: ReplyId) -> Optional[int]:
        """Increment child_replies_count by 1."""
        reply = self._replies.get(reply_id)
        if reply is None:
            return None
        return self._update(
            reply_id, child_replies_count=reply.child_replies_count + 1
        ).child_replies_count

    async def decrement_child_replies_count(self, reply_id: ReplyId) -> Optional[int]:
        """Decrement child_replies_count by 1 (minimum 0)."""
        reply = self._replies.get(reply_id)
        if reply is None:
            return None
        return self._update(
            reply_id, child_replies_count=max(0, reply.child_replies_count - 1)
        ).child_replies_count

    async def increment_likes_count(self, reply_id: ReplyId) -> Optional[int]:
        """Increment likes_count by 1."""
        reply = self._replies.get(reply_id)
        if reply is None:
            return None
        return self._update(reply_id, likes_count=reply.likes_count + 1).likes_count

    async def decrement_likes_count(self, reply_id: ReplyId) -> Optional[int]:
        """Decrement likes_count by 1 (minimum 0)."""
        reply = self._replies.get(reply_id)
        if reply is None:
            return None
        return self._update(
            reply_id, likes_count=max(0, reply.likes_count - 1)
        ).likes_count

    def _update(self, reply_id: ReplyId, **changes) -> Optional[Reply]:
        reply = self._replies.get(reply_id)
        if reply is None:
            return None
        updated = reply.model_copy(update=changes)
        self._replies[reply_id] = updated
        return updated
