"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from board.domain.model import Discussion, Like, Reply
from board.domain.value import (
    ActorId,
    ContentStatus,
    DiscussionId,
    DisplayName,
    LikeId,
    LikeTargetType,
    ReactionType,
    ReplyId,
    ReplyPath,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_discussion(row: Dict[str, Any]) -> Discussion:
    """Convert database row to Discussion domain model.

    Args:
        row: Database row as dict

    Returns:
        Discussion domain model
    """
    return Discussion(
        id=DiscussionId(_uuid(row["id"])),
        title=row["title"],
        content=row["content"],
        author_id=ActorId(row["author_id"]),
        author_name=DisplayName(row["author_name"]),
        status=ContentStatus(row["status"]),
        is_pinned=row["is_pinned"],
        likes_count=row["likes_count"],
        replies_count=row["replies_count"],
        views_count=row["views_count"],
        reply_seq=row["reply_seq"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        last_activity_at=row["last_activity_at"],
    )


def discussion_to_dict(discussion: Discussion) -> Dict[str, Any]:
    """Convert Discussion domain model to database dict.

    Args:
        discussion: Discussion domain model

    Returns:
        Dict suitable for database insertion
    """
    data = discussion.model_dump()
    data["status"] = discussion.status.value
    return data


def row_to_reply(row: Dict[str, Any]) -> Reply:
    """Convert database row to Reply domain model.

    Args:
        row: Database row as dict

    Returns:
        Reply domain model
    """
    parent_reply_id = row.get("parent_reply_id")
    return Reply(
        id=ReplyId(_uuid(row["id"])),
        discussion_id=DiscussionId(_uuid(row["discussion_id"])),
        parent_reply_id=ReplyId(_uuid(parent_reply_id)) if parent_reply_id else None,
        content=row["content"],
        author_id=ActorId(row["author_id"]),
        author_name=DisplayName(row["author_name"]),
        reply_level=row["reply_level"],
        reply_path=ReplyPath.decode(row["reply_path"]),
        likes_count=row["likes_count"],
        child_replies_count=row["child_replies_count"],
        status=ContentStatus(row["status"]),
        is_edited=row["is_edited"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def reply_to_dict(reply: Reply) -> Dict[str, Any]:
    """Convert Reply domain model to database dict.

    Args:
        reply: Reply domain model

    Returns:
        Dict suitable for database insertion
    """
    data = reply.model_dump()
    data["reply_path"] = reply.reply_path.encode()
    data["status"] = reply.status.value
    return data


def row_to_like(row: Dict[str, Any], target_type: LikeTargetType) -> Like:
    """Convert a discussion_likes or reply_likes row to Like domain model.

    Args:
        row: Database row as dict
        target_type: Which like relation the row came from

    Returns:
        Like domain model
    """
    target_column = (
        "discussion_id" if target_type == LikeTargetType.DISCUSSION else "reply_id"
    )
    return Like(
        id=LikeId(_uuid(row["id"])),
        target_type=target_type,
        target_id=_uuid(row[target_column]),
        actor_id=ActorId(row["actor_id"]),
        reaction=ReactionType(row["reaction"]),
        created_at=row["created_at"],
    )


def like_to_dict(like: Like) -> Dict[str, Any]:
    """Convert Like domain model to a row of its like relation.

    Args:
        like: Like domain model

    Returns:
        Dict suitable for database insertion
    """
    target_column = (
        "discussion_id"
        if like.target_type == LikeTargetType.DISCUSSION
        else "reply_id"
    )
    return {
        "id": like.id,
        target_column: like.target_id,
        "actor_id": like.actor_id,
        "reaction": like.reaction.value,
        "created_at": like.created_at,
    }
