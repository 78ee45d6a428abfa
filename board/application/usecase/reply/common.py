"""Shared reply response model."""

from datetime import datetime

from pydantic import BaseModel

from board.domain.model import Reply
from board.domain.value import ContentStatus


class ReplyResponse(BaseModel):
    """Reply details."""

    reply_id: str
    discussion_id: str
    parent_reply_id: str | None
    content: str
    author_id: str
    author_name: str
    reply_level: int
    reply_path: str
    likes_count: int
    child_replies_count: int
    status: ContentStatus
    is_edited: bool
    created_at: datetime
    updated_at: datetime


def to_reply_response(reply: Reply) -> ReplyResponse:
    """Convert a domain reply to its response model."""
    return ReplyResponse(
        reply_id=str(reply.id),
        discussion_id=str(reply.discussion_id),
        parent_reply_id=str(reply.parent_reply_id) if reply.parent_reply_id else None,
        content=reply.content,
        author_id=str(reply.author_id),
        author_name=reply.author_name.root,
        reply_level=reply.reply_level,
        reply_path=reply.reply_path.encode(),
        likes_count=reply.likes_count,
        child_replies_count=reply.child_replies_count,
        status=reply.status,
        is_edited=reply.is_edited,
        created_at=reply.created_at,
        updated_at=reply.updated_at,
    )
