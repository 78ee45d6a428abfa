"""Integration tests for the PostgreSQL engagement store.

Requires a migrated database at DATABASE__URL; skipped otherwise.
"""

import os
from uuid import uuid4

import pytest

from board.domain.error import NotFoundError
from board.domain.service import EngagementStore, QueryService
from board.domain.value import ActorId, LikeTargetType, ReplyId
from tests.harness import create_env_fixture, make_actor

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
    ),
]

# Integration test fixture - real persistence, assumes postgres running
integration_env = create_env_fixture(unmock={"persistence"})

CONTENT = "Where can I find the best deals this week?"


class TestPostgresEngagement:
    """Engagement writes against the real schema."""

    @pytest.mark.asyncio
    async def test_best_deals_scenario(self, integration_env):
        # Arrange
        store = await integration_env.get(EngagementStore)
        queries = await integration_env.get(QueryService)
        discussion = await store.create_discussion(
            make_actor("alice"), "Best deals?", CONTENT
        )

        # Act
        top = await store.create_reply(make_actor("bob"), discussion.id, "Try X")
        await store.create_reply(
            make_actor("carol"), discussion.id, "Agreed", parent_reply_id=top.id
        )
        await store.set_like(make_actor("bob"), LikeTargetType.DISCUSSION, discussion.id)
        await store.set_like(
            make_actor("carol"), LikeTargetType.DISCUSSION, discussion.id
        )

        # Assert
        view = await queries.get_discussion(discussion.id, ActorId("bob"))
        assert view.discussion.likes_count == 2
        assert view.discussion.replies_count == 2
        assert view.viewer_has_liked

        thread = await queries.get_thread(discussion.id)
        assert [e.reply.content for e in thread] == ["Try X", "Agreed"]

    @pytest.mark.asyncio
    async def test_duplicate_like_keeps_transaction_usable(self, integration_env):
        """The unique violation is absorbed by a savepoint."""
        store = await integration_env.get(EngagementStore)
        discussion = await store.create_discussion(
            make_actor("alice"), "Duplicate likes", CONTENT
        )
        bob = make_actor("bob")

        await store.set_like(bob, LikeTargetType.DISCUSSION, discussion.id)
        state = await store.set_like(bob, LikeTargetType.DISCUSSION, discussion.id)

        assert state.liked
        assert state.likes_count == 1

    @pytest.mark.asyncio
    async def test_cascade_delete_counts(self, integration_env):
        store = await integration_env.get(EngagementStore)
        queries = await integration_env.get(QueryService)
        bob = make_actor("bob")
        discussion = await store.create_discussion(
            make_actor("alice"), "Cascade", CONTENT
        )
        a = await store.create_reply(bob, discussion.id, "A")
        b = await store.create_reply(bob, discussion.id, "B", parent_reply_id=a.id)
        await store.create_reply(bob, discussion.id, "C", parent_reply_id=b.id)
        await store.set_like(make_actor("carol"), LikeTargetType.REPLY, b.id)

        deleted = await store.delete_reply(bob, a.id)

        assert deleted == 3
        view = await queries.get_discussion(discussion.id)
        assert view.discussion.replies_count == 0
        with pytest.raises(NotFoundError):
            await store.set_like(make_actor("carol"), LikeTargetType.REPLY, b.id)

    @pytest.mark.asyncio
    async def test_missing_parent(self, integration_env):
        store = await integration_env.get(EngagementStore)
        discussion = await store.create_discussion(
            make_actor("alice"), "Orphans", CONTENT
        )

        with pytest.raises(NotFoundError):
            await store.create_reply(
                make_actor("bob"),
                discussion.id,
                "Orphan",
                parent_reply_id=ReplyId(uuid4()),
            )
