"""Unit tests for discussion use cases."""

import pytest

from board.application.usecase.discussion import (
    CreateDiscussionRequest,
    CreateDiscussionUseCase,
    GetDiscussionRequest,
    GetDiscussionUseCase,
    ListDiscussionsRequest,
    ListDiscussionsUseCase,
    RecordViewRequest,
    RecordViewUseCase,
)
from board.domain.value import DiscussionSortOrder
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

CONTENT = "Where can I find the best deals this week?"


async def _create(env, title: str, actor_id: str = "alice"):
    use_case = await env.get(CreateDiscussionUseCase)
    return await use_case.execute(
        CreateDiscussionRequest(
            actor_id=actor_id,
            actor_name=actor_id.capitalize(),
            title=title,
            content=CONTENT,
        )
    )


class TestListDiscussionsUseCase:
    """Tests for ListDiscussionsUseCase."""

    @pytest.mark.asyncio
    async def test_returns_page_metadata(self, unit_env):
        # Arrange
        for title in ("First", "Second", "Third"):
            await _create(unit_env, title)
        use_case = await unit_env.get(ListDiscussionsUseCase)

        # Act
        response = await use_case.execute(ListDiscussionsRequest(limit=2))

        # Assert
        assert len(response.discussions) == 2
        assert response.total == 3
        assert response.limit == 2
        assert response.offset == 0

    @pytest.mark.asyncio
    async def test_default_limit_comes_from_configuration(self, unit_env):
        use_case = await unit_env.get(ListDiscussionsUseCase)

        response = await use_case.execute(ListDiscussionsRequest())

        assert response.limit == 20
        assert response.discussions == []

    @pytest.mark.asyncio
    async def test_views_sort_after_recorded_views(self, unit_env):
        quiet = await _create(unit_env, "Quiet")
        watched = await _create(unit_env, "Watched")
        record_view = await unit_env.get(RecordViewUseCase)
        await record_view.execute(RecordViewRequest(discussion_id=watched.discussion_id))
        use_case = await unit_env.get(ListDiscussionsUseCase)

        response = await use_case.execute(
            ListDiscussionsRequest(sort=DiscussionSortOrder.VIEWS)
        )

        assert [d.discussion_id for d in response.discussions] == [
            watched.discussion_id,
            quiet.discussion_id,
        ]
        assert response.discussions[0].views_count == 1


class TestGetDiscussionUseCase:
    """Tests for GetDiscussionUseCase."""

    @pytest.mark.asyncio
    async def test_returns_discussion_for_anonymous_viewer(self, unit_env):
        created = await _create(unit_env, "Best deals?")
        use_case = await unit_env.get(GetDiscussionUseCase)

        response = await use_case.execute(
            GetDiscussionRequest(discussion_id=created.discussion_id)
        )

        assert response.discussion.title == "Best deals?"
        assert response.discussion.author_name == "Alice"
        assert response.viewer_has_liked is False
