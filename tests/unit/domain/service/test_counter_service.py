"""Unit tests for CounterService."""

from uuid import uuid4

import pytest

from board.domain.error import NotFoundError
from board.domain.model import Like
from board.domain.model.common import utcnow
from board.domain.repository import UnitOfWorkFactory
from board.domain.service import CounterService, EngagementStore
from board.domain.value import ActorId, LikeId, LikeTargetType, ReactionType
from tests.harness import create_env_fixture, make_actor

unit_env = create_env_fixture()

CONTENT = "Counting replies and likes, nothing more."


class TestCounterFloor:
    """Replayed delete events never drive a counter below zero."""

    @pytest.mark.asyncio
    async def test_replayed_reply_delete_stops_at_zero(self, unit_env):
        # Arrange
        store = await unit_env.get(EngagementStore)
        counters = await unit_env.get(CounterService)
        factory = await unit_env.get(UnitOfWorkFactory)
        discussion = await store.create_discussion(make_actor(), "Counters", CONTENT)
        reply = await store.create_reply(make_actor("bob"), discussion.id, "Only one")

        # Act
        async with factory() as uow:
            await counters.reply_deleted(uow, reply)
            await counters.reply_deleted(uow, reply)

        # Assert
        async with factory() as uow:
            saved = await uow.discussions.find_by_id(discussion.id)
        assert saved.replies_count == 0

    @pytest.mark.asyncio
    async def test_replayed_like_delete_stops_at_zero(self, unit_env):
        store = await unit_env.get(EngagementStore)
        counters = await unit_env.get(CounterService)
        factory = await unit_env.get(UnitOfWorkFactory)
        discussion = await store.create_discussion(make_actor(), "Counters", CONTENT)
        await store.set_like(make_actor("bob"), LikeTargetType.DISCUSSION, discussion.id)

        async with factory() as uow:
            first = await counters.like_deleted(
                uow, LikeTargetType.DISCUSSION, discussion.id
            )
            second = await counters.like_deleted(
                uow, LikeTargetType.DISCUSSION, discussion.id
            )

        assert first == 0
        assert second == 0

    @pytest.mark.asyncio
    async def test_like_delete_on_missing_target_returns_zero(self, unit_env):
        counters = await unit_env.get(CounterService)
        factory = await unit_env.get(UnitOfWorkFactory)

        async with factory() as uow:
            count = await counters.like_deleted(uow, LikeTargetType.REPLY, uuid4())

        assert count == 0


class TestCounterConservation:
    """Counters equal the number of live fact rows."""

    @pytest.mark.asyncio
    async def test_counters_match_fact_rows_after_mixed_operations(self, unit_env):
        # Arrange
        store = await unit_env.get(EngagementStore)
        factory = await unit_env.get(UnitOfWorkFactory)
        bob, carol, dave = make_actor("bob"), make_actor("carol"), make_actor("dave")
        discussion = await store.create_discussion(make_actor(), "Counters", CONTENT)

        # Act
        a = await store.create_reply(bob, discussion.id, "A")
        b = await store.create_reply(carol, discussion.id, "B", parent_reply_id=a.id)
        await store.create_reply(dave, discussion.id, "C", parent_reply_id=a.id)
        await store.create_reply(dave, discussion.id, "D")
        await store.delete_reply(carol, b.id)
        for actor in (bob, carol, dave):
            await store.set_like(actor, LikeTargetType.DISCUSSION, discussion.id)
            await store.toggle_like(actor, LikeTargetType.REPLY, a.id)
        await store.clear_like(carol, LikeTargetType.DISCUSSION, discussion.id)
        await store.toggle_like(dave, LikeTargetType.REPLY, a.id)

        # Assert
        async with factory() as uow:
            saved = await uow.discussions.find_by_id(discussion.id)
            replies = await uow.replies.find_by_discussion(discussion.id)
            saved_a = await uow.replies.find_by_id(a.id)
            discussion_likes = await uow.likes.count_by_target(
                LikeTargetType.DISCUSSION, discussion.id
            )
            reply_likes = await uow.likes.count_by_target(LikeTargetType.REPLY, a.id)

        assert saved.replies_count == len(replies) == 3
        assert saved.likes_count == discussion_likes == 2
        assert saved_a.likes_count == reply_likes == 2
        assert saved_a.child_replies_count == 1


class TestLikeInserted:
    """Tests for like_inserted."""

    @pytest.mark.asyncio
    async def test_like_on_vanished_target_raises_not_found(self, unit_env):
        counters = await unit_env.get(CounterService)
        factory = await unit_env.get(UnitOfWorkFactory)
        like = Like(
            id=LikeId(uuid4()),
            target_type=LikeTargetType.REPLY,
            target_id=uuid4(),
            actor_id=ActorId("bob"),
            reaction=ReactionType.LIKE,
            created_at=utcnow(),
        )

        with pytest.raises(NotFoundError):
            async with factory() as uow:
                await counters.like_inserted(uow, like)
