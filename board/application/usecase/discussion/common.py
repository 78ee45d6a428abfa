"""Shared discussion response model."""

from datetime import datetime

from pydantic import BaseModel

from board.domain.model import Discussion
from board.domain.value import ContentStatus


class DiscussionResponse(BaseModel):
    """Discussion details."""

    discussion_id: str
    title: str
    content: str
    author_id: str
    author_name: str
    status: ContentStatus
    is_pinned: bool
    likes_count: int
    replies_count: int
    views_count: int
    created_at: datetime
    updated_at: datetime
    last_activity_at: datetime


def to_discussion_response(discussion: Discussion) -> DiscussionResponse:
    """Convert a domain discussion to its response model."""
    return DiscussionResponse(
        discussion_id=str(discussion.id),
        title=discussion.title,
        content=discussion.content,
        author_id=str(discussion.author_id),
        author_name=discussion.author_name.root,
        status=discussion.status,
        is_pinned=discussion.is_pinned,
        likes_count=discussion.likes_count,
        replies_count=discussion.replies_count,
        views_count=discussion.views_count,
        created_at=discussion.created_at,
        updated_at=discussion.updated_at,
        last_activity_at=discussion.last_activity_at,
    )
