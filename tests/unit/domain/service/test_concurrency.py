"""Unit tests for concurrent and abandoned engagement operations."""

import asyncio
from uuid import uuid4

import pytest

from board.domain.model import Reply
from board.domain.repository import UnitOfWorkFactory
from board.domain.service import (
    CounterService,
    EngagementStore,
    HierarchyService,
    TransactionRunner,
)
from board.domain.value import LikeTargetType, ReplyId
from tests.harness import create_env_fixture, make_actor

unit_env = create_env_fixture()

CONTENT = "Where can I find the best deals this week?"


async def _snapshot(env, discussion_id):
    factory = await env.get(UnitOfWorkFactory)
    async with factory() as uow:
        discussion = await uow.discussions.find_by_id(discussion_id)
        replies = await uow.replies.count_by_discussion(discussion_id)
        likes = await uow.likes.count_by_target(
            LikeTargetType.DISCUSSION, discussion_id
        )
    return discussion, replies, likes


class TestCancellation:
    """An operation abandoned mid-transaction leaves no trace."""

    @pytest.mark.asyncio
    async def test_cancelled_reply_insert_is_rolled_back(self, unit_env):
        # Arrange
        store = await unit_env.get(EngagementStore)
        runner = await unit_env.get(TransactionRunner)
        hierarchy = await unit_env.get(HierarchyService)
        counters = await unit_env.get(CounterService)
        alice = make_actor("alice")
        discussion = await store.create_discussion(alice, "Best deals?", CONTENT)
        before = await _snapshot(unit_env, discussion.id)

        inside = asyncio.Event()
        never = asyncio.Event()

        async def insert_then_hang(uow):
            level, path = await hierarchy.place(uow, discussion.id, None)
            reply = Reply(
                id=ReplyId(uuid4()),
                discussion_id=discussion.id,
                content="Abandoned before commit",
                author_id=alice.actor_id,
                author_name=alice.display_name,
                reply_level=level,
                reply_path=path,
            )
            saved = await uow.replies.save(reply)
            await counters.reply_inserted(uow, saved, saved.created_at)
            inside.set()
            await never.wait()

        # Act
        task = asyncio.create_task(runner.run("create_reply", insert_then_hang))
        await inside.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        # Assert
        assert await _snapshot(unit_env, discussion.id) == before

    @pytest.mark.asyncio
    async def test_store_is_usable_after_cancellation(self, unit_env):
        # Arrange
        store = await unit_env.get(EngagementStore)
        runner = await unit_env.get(TransactionRunner)
        alice = make_actor("alice")
        discussion = await store.create_discussion(alice, "Best deals?", CONTENT)

        inside = asyncio.Event()

        async def hang(uow):
            inside.set()
            await asyncio.Event().wait()

        task = asyncio.create_task(runner.run("hang", hang))
        await inside.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        # Act
        reply = await asyncio.wait_for(
            store.create_reply(make_actor("bob"), discussion.id, "Try X"), timeout=1
        )

        # Assert
        assert reply.reply_level == 0
        updated, replies, _ = await _snapshot(unit_env, discussion.id)
        assert updated.replies_count == replies == 1


class TestConcurrentEngagement:
    """Counters match fact rows under concurrent writers."""

    @pytest.mark.asyncio
    async def test_concurrent_likes_count_each_actor_once(self, unit_env):
        # Arrange
        store = await unit_env.get(EngagementStore)
        discussion = await store.create_discussion(
            make_actor("alice"), "Best deals?", CONTENT
        )
        actors = [make_actor(f"user{i}") for i in range(8)]

        # Act: every actor likes twice, all at once
        states = await asyncio.gather(
            *(
                store.set_like(actor, LikeTargetType.DISCUSSION, discussion.id)
                for actor in actors + actors
            )
        )

        # Assert
        assert all(state.liked for state in states)
        updated, _, likes = await _snapshot(unit_env, discussion.id)
        assert updated.likes_count == len(actors)
        assert likes == len(actors)

    @pytest.mark.asyncio
    async def test_concurrent_replies_match_reply_rows(self, unit_env):
        # Arrange
        store = await unit_env.get(EngagementStore)
        discussion = await store.create_discussion(
            make_actor("alice"), "Best deals?", CONTENT
        )
        top = await store.create_reply(make_actor("bob"), discussion.id, "Try X")

        # Act
        replies = await asyncio.gather(
            *(
                store.create_reply(
                    make_actor(f"user{i}"),
                    discussion.id,
                    f"Reply {i}",
                    parent_reply_id=top.id if i % 2 else None,
                )
                for i in range(10)
            )
        )

        # Assert
        updated, reply_rows, _ = await _snapshot(unit_env, discussion.id)
        assert reply_rows == 11
        assert updated.replies_count == reply_rows
        assert len({reply.reply_path.root for reply in replies}) == 10
