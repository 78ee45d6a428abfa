"""initial_schema

Create the engagement schema for the discussion board:
- Discussions (with denormalized likes/replies/views counters)
- Discussion Replies (threaded, materialized path, bounded depth)
- Discussion Likes and Reply Likes (one row per actor, target and reaction)

Revision ID: 3c41f0d7a2e9
Revises:
Create Date: 2026-10-18 21:52:04.381920

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41f0d7a2e9"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE content_status AS ENUM ('active', 'hidden', 'deleted', 'flagged');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE reaction_type AS ENUM ('like', 'love', 'laugh', 'angry', 'sad');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # DISCUSSIONS table
    # ========================================================================
    op.create_table(
        "discussions",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.String(255), nullable=False),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "active",
                "hidden",
                "deleted",
                "flagged",
                name="content_status",
                create_type=False,
            ),
            nullable=False,
            server_default="active",
        ),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("replies_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("views_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reply_seq", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "last_activity_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "char_length(title) BETWEEN 3 AND 200", name="discussions_title_length"
        ),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 10 AND 10000",
            name="discussions_content_length",
        ),
        sa.CheckConstraint(
            "likes_count >= 0 AND replies_count >= 0 AND views_count >= 0",
            name="discussions_counters_non_negative",
        ),
        sa.CheckConstraint(
            "last_activity_at >= created_at",
            name="discussions_activity_after_creation",
        ),
    )
    op.create_index("idx_discussions_status", "discussions", ["status"])
    op.create_index("idx_discussions_is_pinned", "discussions", ["is_pinned"])
    op.create_index(
        "idx_discussions_last_activity_at",
        "discussions",
        [sa.text("last_activity_at DESC")],
    )
    op.create_index("idx_discussions_author_id", "discussions", ["author_id"])

    # ========================================================================
    # DISCUSSION_REPLIES table
    # ========================================================================
    op.create_table(
        "discussion_replies",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("discussion_id", sa.UUID(), nullable=False),
        sa.Column("parent_reply_id", sa.UUID(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.String(255), nullable=False),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.Column("reply_level", sa.Integer(), nullable=False, server_default="0"),
        # Byte-wise collation so string order matches segment order
        sa.Column("reply_path", sa.Text(collation="C"), nullable=False),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "child_replies_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "status",
            postgresql.ENUM(
                "active",
                "hidden",
                "deleted",
                "flagged",
                name="content_status",
                create_type=False,
            ),
            nullable=False,
            server_default="active",
        ),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["parent_reply_id"], ["discussion_replies.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("discussion_id", "reply_path", name="unique_reply_path"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 5000", name="replies_content_length"
        ),
        sa.CheckConstraint(
            "reply_level >= 0 AND reply_level <= 10", name="replies_level_range"
        ),
        sa.CheckConstraint(
            "likes_count >= 0 AND child_replies_count >= 0",
            name="replies_counters_non_negative",
        ),
    )
    op.create_index(
        "idx_replies_discussion_id", "discussion_replies", ["discussion_id"]
    )
    op.create_index(
        "idx_replies_parent_reply_id", "discussion_replies", ["parent_reply_id"]
    )
    op.create_index("idx_replies_author_id", "discussion_replies", ["author_id"])

    # ========================================================================
    # DISCUSSION_LIKES table
    # ========================================================================
    op.create_table(
        "discussion_likes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("discussion_id", sa.UUID(), nullable=False),
        sa.Column("actor_id", sa.String(255), nullable=False),
        sa.Column(
            "reaction",
            postgresql.ENUM(
                "like",
                "love",
                "laugh",
                "angry",
                "sad",
                name="reaction_type",
                create_type=False,
            ),
            nullable=False,
            server_default="like",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "discussion_id", "actor_id", "reaction", name="unique_discussion_like"
        ),
    )
    op.create_index(
        "idx_discussion_likes_actor_id", "discussion_likes", ["actor_id"]
    )

    # ========================================================================
    # REPLY_LIKES table
    # ========================================================================
    op.create_table(
        "reply_likes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("reply_id", sa.UUID(), nullable=False),
        sa.Column("actor_id", sa.String(255), nullable=False),
        sa.Column(
            "reaction",
            postgresql.ENUM(
                "like",
                "love",
                "laugh",
                "angry",
                "sad",
                name="reaction_type",
                create_type=False,
            ),
            nullable=False,
            server_default="like",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["reply_id"], ["discussion_replies.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "reply_id", "actor_id", "reaction", name="unique_reply_like"
        ),
    )
    op.create_index("idx_reply_likes_actor_id", "reply_likes", ["actor_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("reply_likes")
    op.drop_table("discussion_likes")
    op.drop_table("discussion_replies")
    op.drop_table("discussions")
    op.execute("DROP TYPE IF EXISTS reaction_type")
    op.execute("DROP TYPE IF EXISTS content_status")
