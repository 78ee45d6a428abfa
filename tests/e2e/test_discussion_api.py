"""End-to-end tests for the discussion API.

Runs the real FastAPI app against the in-memory store.
"""

import pytest
from fastapi.testclient import TestClient

from board.interface.api.app import create_app
from board.util.di.container import setup_di
from tests.di import build_test_container

ALICE = {"X-Actor-Id": "alice", "X-Actor-Name": "Alice"}
BOB = {"X-Actor-Id": "bob", "X-Actor-Name": "Bob"}
CAROL = {"X-Actor-Id": "carol", "X-Actor-Name": "Carol"}

DISCUSSION = {
    "title": "Best deals?",
    "content": "Where can I find the best deals this week?",
}


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app()
    test_container = build_test_container(for_app=True)
    setup_di(app_instance, test_container)
    with TestClient(app_instance) as test_client:
        yield test_client


def _create_discussion(client, headers=ALICE) -> str:
    response = client.post("/discussions", json=DISCUSSION, headers=headers)
    assert response.status_code == 201
    return response.json()["discussion_id"]


class TestBestDealsScenario:
    """The full flow a community member goes through."""

    def test_discussion_with_nested_replies_and_likes(self, client):
        # Create discussion
        discussion_id = _create_discussion(client)

        # Top-level reply, then a nested reply under it
        top = client.post(
            f"/discussions/{discussion_id}/replies",
            json={"content": "Try X"},
            headers=BOB,
        )
        assert top.status_code == 201
        nested = client.post(
            f"/discussions/{discussion_id}/replies",
            json={"content": "Agreed", "parent_reply_id": top.json()["reply_id"]},
            headers=CAROL,
        )
        assert nested.status_code == 201

        # Two different actors like the discussion
        for headers in (BOB, CAROL):
            response = client.put(
                f"/discussions/{discussion_id}/likes", headers=headers
            )
            assert response.status_code == 200

        # Counters
        discussion = client.get(f"/discussions/{discussion_id}", headers=BOB).json()
        assert discussion["discussion"]["likes_count"] == 2
        assert discussion["discussion"]["replies_count"] == 2
        assert discussion["viewer_has_liked"] is True

        # Thread in parent-then-child order
        thread = client.get(f"/discussions/{discussion_id}/replies").json()
        assert [r["content"] for r in thread["replies"]] == ["Try X", "Agreed"]
        assert [r["reply_level"] for r in thread["replies"]] == [0, 1]


class TestDiscussionEndpoints:
    """HTTP contract of the discussion endpoints."""

    def test_create_without_identity_is_unauthorized(self, client):
        response = client.post("/discussions", json=DISCUSSION)

        assert response.status_code == 401

    def test_create_with_short_title_is_unprocessable(self, client):
        response = client.post(
            "/discussions",
            json={"title": "ab", "content": DISCUSSION["content"]},
            headers=ALICE,
        )

        assert response.status_code == 422
        assert response.json()["error"] == "ValidationError"

    def test_get_unknown_discussion_is_not_found(self, client):
        response = client.get("/discussions/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404

    def test_edit_by_other_actor_is_forbidden(self, client):
        discussion_id = _create_discussion(client)

        response = client.patch(
            f"/discussions/{discussion_id}",
            json={"title": "Not yours"},
            headers=BOB,
        )

        assert response.status_code == 403

    def test_delete_hides_discussion(self, client):
        discussion_id = _create_discussion(client)

        response = client.delete(f"/discussions/{discussion_id}", headers=ALICE)

        assert response.status_code == 200
        assert response.json()["status"] == "deleted"
        assert client.get(f"/discussions/{discussion_id}").status_code == 404
        assert client.get("/discussions").json()["total"] == 0

    def test_record_view(self, client):
        discussion_id = _create_discussion(client)

        response = client.post(f"/discussions/{discussion_id}/views")

        assert response.status_code == 204
        discussion = client.get(f"/discussions/{discussion_id}").json()
        assert discussion["discussion"]["views_count"] == 1

    def test_list_rejects_invalid_limit(self, client):
        response = client.get("/discussions", params={"limit": 0})

        assert response.status_code == 422

    def test_list_with_sort(self, client):
        _create_discussion(client)

        response = client.get("/discussions", params={"sort": "popular"})

        assert response.status_code == 200
        assert response.json()["total"] == 1


class TestReplyEndpoints:
    """HTTP contract of the reply endpoints."""

    def test_depth_limit_is_unprocessable(self, client):
        discussion_id = _create_discussion(client)
        parent_id = None
        for level in range(11):
            body = {"content": f"Level {level}"}
            if parent_id:
                body["parent_reply_id"] = parent_id
            response = client.post(
                f"/discussions/{discussion_id}/replies", json=body, headers=BOB
            )
            assert response.status_code == 201
            parent_id = response.json()["reply_id"]

        response = client.post(
            f"/discussions/{discussion_id}/replies",
            json={"content": "Too deep", "parent_reply_id": parent_id},
            headers=BOB,
        )

        assert response.status_code == 422
        assert response.json()["error"] == "DepthExceededError"

    def test_edit_and_delete_reply(self, client):
        discussion_id = _create_discussion(client)
        reply_id = client.post(
            f"/discussions/{discussion_id}/replies",
            json={"content": "Try X"},
            headers=BOB,
        ).json()["reply_id"]

        edited = client.patch(
            f"/replies/{reply_id}", json={"content": "Try Y"}, headers=BOB
        )
        forbidden = client.delete(f"/replies/{reply_id}", headers=CAROL)
        deleted = client.delete(f"/replies/{reply_id}", headers=BOB)

        assert edited.status_code == 200
        assert edited.json()["is_edited"] is True
        assert forbidden.status_code == 403
        assert deleted.status_code == 200
        assert deleted.json()["deleted_count"] == 1


class TestLikeEndpoints:
    """HTTP contract of the like endpoints."""

    def test_like_is_idempotent(self, client):
        discussion_id = _create_discussion(client)

        first = client.put(f"/discussions/{discussion_id}/likes", headers=BOB)
        second = client.put(f"/discussions/{discussion_id}/likes", headers=BOB)

        assert first.json()["likes_count"] == 1
        assert second.json()["likes_count"] == 1

    def test_reply_reaction_toggle(self, client):
        discussion_id = _create_discussion(client)
        reply_id = client.post(
            f"/discussions/{discussion_id}/replies",
            json={"content": "Try X"},
            headers=BOB,
        ).json()["reply_id"]

        on = client.post(
            f"/replies/{reply_id}/likes/toggle",
            params={"reaction": "love"},
            headers=CAROL,
        )
        off = client.post(
            f"/replies/{reply_id}/likes/toggle",
            params={"reaction": "love"},
            headers=CAROL,
        )

        assert on.json()["liked"] is True
        assert on.json()["reaction"] == "love"
        assert off.json()["liked"] is False
        assert off.json()["likes_count"] == 0

    def test_unlike_without_like_is_a_no_op(self, client):
        discussion_id = _create_discussion(client)

        response = client.delete(f"/discussions/{discussion_id}/likes", headers=BOB)

        assert response.status_code == 200
        assert response.json()["liked"] is False
        assert response.json()["likes_count"] == 0


class TestHealthEndpoints:
    def test_liveness(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_counts_discussions(self, client):
        _create_discussion(client)

        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "discussions": 1}
