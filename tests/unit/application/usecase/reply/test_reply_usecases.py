"""Unit tests for reply use cases."""

import pytest

from board.application.usecase.discussion import (
    CreateDiscussionRequest,
    CreateDiscussionUseCase,
)
from board.application.usecase.reply import (
    CreateReplyRequest,
    CreateReplyUseCase,
    DeleteReplyRequest,
    DeleteReplyUseCase,
    GetThreadRequest,
    GetThreadUseCase,
    UpdateReplyRequest,
    UpdateReplyUseCase,
)
from board.domain.error import ForbiddenError
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _discussion_id(env) -> str:
    use_case = await env.get(CreateDiscussionUseCase)
    response = await use_case.execute(
        CreateDiscussionRequest(
            actor_id="alice",
            actor_name="Alice",
            title="Best deals?",
            content="Where can I find the best deals this week?",
        )
    )
    return response.discussion_id


async def _reply(env, discussion_id, content, parent_reply_id=None, actor_id="bob"):
    use_case = await env.get(CreateReplyUseCase)
    return await use_case.execute(
        CreateReplyRequest(
            actor_id=actor_id,
            actor_name=actor_id.capitalize(),
            discussion_id=discussion_id,
            content=content,
            parent_reply_id=parent_reply_id,
        )
    )


class TestCreateReplyUseCase:
    """Tests for CreateReplyUseCase."""

    @pytest.mark.asyncio
    async def test_nested_reply_response(self, unit_env):
        discussion_id = await _discussion_id(unit_env)
        parent = await _reply(unit_env, discussion_id, "Try X")

        child = await _reply(
            unit_env, discussion_id, "Agreed", parent_reply_id=parent.reply_id
        )

        assert parent.reply_level == 0
        assert child.reply_level == 1
        assert child.parent_reply_id == parent.reply_id
        assert child.reply_path == "0000000001.0000000002"
        assert child.author_name == "Bob"


class TestUpdateReplyUseCase:
    """Tests for UpdateReplyUseCase."""

    @pytest.mark.asyncio
    async def test_update_by_other_actor_is_forbidden(self, unit_env):
        discussion_id = await _discussion_id(unit_env)
        reply = await _reply(unit_env, discussion_id, "Try X")
        use_case = await unit_env.get(UpdateReplyUseCase)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                UpdateReplyRequest(
                    actor_id="mallory",
                    actor_name="Mallory",
                    reply_id=reply.reply_id,
                    content="Buy Y instead",
                )
            )


class TestDeleteReplyUseCase:
    """Tests for DeleteReplyUseCase."""

    @pytest.mark.asyncio
    async def test_reports_deleted_count_and_thread_shrinks(self, unit_env):
        # Arrange
        discussion_id = await _discussion_id(unit_env)
        top = await _reply(unit_env, discussion_id, "Top")
        await _reply(unit_env, discussion_id, "Child", parent_reply_id=top.reply_id)
        await _reply(unit_env, discussion_id, "Sibling")
        delete_use_case = await unit_env.get(DeleteReplyUseCase)
        thread_use_case = await unit_env.get(GetThreadUseCase)

        # Act
        response = await delete_use_case.execute(
            DeleteReplyRequest(actor_id="bob", actor_name="Bob", reply_id=top.reply_id)
        )

        # Assert
        assert response.deleted_count == 2
        thread = await thread_use_case.execute(
            GetThreadRequest(discussion_id=discussion_id)
        )
        assert [r.content for r in thread.replies] == ["Sibling"]
