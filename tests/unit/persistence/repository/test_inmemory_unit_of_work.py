"""Unit tests for the in-memory unit of work."""

import asyncio
from uuid import uuid4

import pytest

from board.domain.model import Discussion
from board.domain.value import ActorId, DiscussionId, DisplayName
from board.persistence.repository.inmemory import InMemoryUnitOfWorkFactory


def _discussion() -> Discussion:
    return Discussion(
        id=DiscussionId(uuid4()),
        title="In memory",
        content="Rows that live only in a dictionary.",
        author_id=ActorId("alice"),
        author_name=DisplayName("Alice"),
    )


class TestInMemoryUnitOfWork:
    """Transactions over the in-memory store are all-or-nothing."""

    @pytest.mark.asyncio
    async def test_changes_invisible_until_commit(self):
        factory = InMemoryUnitOfWorkFactory()
        discussion = _discussion()

        async with factory() as uow:
            await uow.discussions.save(discussion)
            assert factory.database.tables.discussions == {}

        assert discussion.id in factory.database.tables.discussions

    @pytest.mark.asyncio
    async def test_exception_discards_changes(self):
        factory = InMemoryUnitOfWorkFactory()

        with pytest.raises(RuntimeError):
            async with factory() as uow:
                await uow.discussions.save(_discussion())
                raise RuntimeError("boom")

        assert factory.database.tables.discussions == {}

    @pytest.mark.asyncio
    async def test_concurrent_increments_are_serialized(self):
        """Read-modify-write in separate units of work never loses updates."""
        factory = InMemoryUnitOfWorkFactory()
        discussion = _discussion()
        async with factory() as uow:
            await uow.discussions.save(discussion)

        async def view():
            async with factory() as uow:
                await asyncio.sleep(0)
                await uow.discussions.increment_views_count(discussion.id)

        await asyncio.gather(*(view() for _ in range(20)))

        async with factory() as uow:
            saved = await uow.discussions.find_by_id(discussion.id)
        assert saved.views_count == 20
