"""SQLAlchemy table definitions for the discussion board.

These table definitions are used with SQLAlchemy Core and manual mappers.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

content_status = Enum(
    "active", "hidden", "deleted", "flagged", name="content_status", create_type=False
)
reaction_type = Enum(
    "like", "love", "laugh", "angry", "sad", name="reaction_type", create_type=False
)

# Byte-wise collation so "." sorts before digits regardless of database locale
PATH_COLLATION = "C"

# ============================================================================
# DISCUSSIONS TABLE
# ============================================================================
discussions_table = Table(
    "discussions",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("title", String(200), nullable=False),
    Column("content", Text, nullable=False),
    Column("author_id", String(255), nullable=False),  # Opaque identity provider ID
    Column("author_name", String(255), nullable=False),  # Snapshot at creation
    Column("status", content_status, nullable=False, server_default="active"),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("replies_count", Integer, nullable=False, server_default="0"),
    Column("views_count", Integer, nullable=False, server_default="0"),
    Column("reply_seq", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "last_activity_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
    CheckConstraint(
        "char_length(title) BETWEEN 3 AND 200", name="discussions_title_length"
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 10 AND 10000", name="discussions_content_length"
    ),
    CheckConstraint(
        "likes_count >= 0 AND replies_count >= 0 AND views_count >= 0",
        name="discussions_counters_non_negative",
    ),
    CheckConstraint(
        "last_activity_at >= created_at", name="discussions_activity_after_creation"
    ),
)

Index("idx_discussions_status", discussions_table.c.status)
Index("idx_discussions_is_pinned", discussions_table.c.is_pinned)
Index("idx_discussions_last_activity_at", discussions_table.c.last_activity_at)
Index("idx_discussions_author_id", discussions_table.c.author_id)

# ============================================================================
# DISCUSSION REPLIES TABLE
# ============================================================================
discussion_replies_table = Table(
    "discussion_replies",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "discussion_id",
        UUID,
        ForeignKey("discussions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "parent_reply_id",
        UUID,
        ForeignKey("discussion_replies.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("content", Text, nullable=False),
    Column("author_id", String(255), nullable=False),
    Column("author_name", String(255), nullable=False),
    Column("reply_level", Integer, nullable=False, server_default="0"),
    # Zero-padded sequence numbers, e.g. "0000000001.0000000004"
    Column("reply_path", Text(collation=PATH_COLLATION), nullable=False),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("child_replies_count", Integer, nullable=False, server_default="0"),
    Column("status", content_status, nullable=False, server_default="active"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 5000", name="replies_content_length"
    ),
    CheckConstraint(
        "reply_level >= 0 AND reply_level <= 10", name="replies_level_range"
    ),
    CheckConstraint(
        "likes_count >= 0 AND child_replies_count >= 0",
        name="replies_counters_non_negative",
    ),
    UniqueConstraint("discussion_id", "reply_path", name="unique_reply_path"),
)

Index("idx_replies_discussion_id", discussion_replies_table.c.discussion_id)
Index("idx_replies_parent_reply_id", discussion_replies_table.c.parent_reply_id)
Index("idx_replies_author_id", discussion_replies_table.c.author_id)

# ============================================================================
# DISCUSSION LIKES TABLE
# ============================================================================
discussion_likes_table = Table(
    "discussion_likes",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "discussion_id",
        UUID,
        ForeignKey("discussions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("actor_id", String(255), nullable=False),
    Column("reaction", reaction_type, nullable=False, server_default="like"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "discussion_id", "actor_id", "reaction", name="unique_discussion_like"
    ),
)

Index("idx_discussion_likes_actor_id", discussion_likes_table.c.actor_id)

# ============================================================================
# REPLY LIKES TABLE
# ============================================================================
reply_likes_table = Table(
    "reply_likes",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "reply_id",
        UUID,
        ForeignKey("discussion_replies.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("actor_id", String(255), nullable=False),
    Column("reaction", reaction_type, nullable=False, server_default="like"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("reply_id", "actor_id", "reaction", name="unique_reply_like"),
)

Index("idx_reply_likes_actor_id", reply_likes_table.c.actor_id)
