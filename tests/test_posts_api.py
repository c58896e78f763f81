"""Tests for post, like and comment endpoints."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from devconnector.services.credentials import verify_token
from tests.conftest import TEST_SECRET, auth


@pytest.fixture
def alice(register: Callable[..., str]) -> str:
    return register(name="Alice", email="a@x.com")


@pytest.fixture
def bob(register: Callable[..., str]) -> str:
    return register(name="Bob", email="b@y.com")


@pytest.fixture
def post_id(client: TestClient, alice: str) -> str:
    response = client.post("/api/posts", json={"text": "hello"}, headers=auth(alice))
    assert response.status_code == 200, response.text
    return response.json()["id"]


class TestCreateAndRead:
    def test_create_then_list(self, client: TestClient, alice: str) -> None:
        """Test creating a post snapshots the author and shows up in the list."""
        created = client.post("/api/posts", json={"text": "hello"}, headers=auth(alice))

        assert created.status_code == 200
        post = created.json()
        assert post["name"] == "Alice"
        assert post["avatar"].startswith("//www.gravatar.com/avatar/")
        assert post["user"] == verify_token(alice, TEST_SECRET)

        posts = client.get("/api/posts", headers=auth(alice)).json()
        assert len(posts) == 1
        assert posts[0]["text"] == "hello"
        assert posts[0]["likes"] == []
        assert posts[0]["comments"] == []

    def test_list_is_newest_first(self, client: TestClient, alice: str) -> None:
        """Test posts list newest first."""
        for text in ("first", "second", "third"):
            client.post("/api/posts", json={"text": text}, headers=auth(alice))

        posts = client.get("/api/posts", headers=auth(alice)).json()

        assert [p["text"] for p in posts] == ["third", "second", "first"]

    def test_text_required(self, client: TestClient, alice: str) -> None:
        """Test post text is required."""
        response = client.post("/api/posts", json={"text": "   "}, headers=auth(alice))

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Text is required"

    def test_reads_require_auth(self, client: TestClient, post_id: str) -> None:
        """Test reading posts requires a token."""
        assert client.get("/api/posts").status_code == 401
        assert client.get(f"/api/posts/{post_id}").status_code == 401

    def test_get_by_id(self, client: TestClient, alice: str, post_id: str) -> None:
        """Test fetching a single post."""
        response = client.get(f"/api/posts/{post_id}", headers=auth(alice))

        assert response.status_code == 200
        assert response.json()["id"] == post_id

    @pytest.mark.parametrize("missing", ["f" * 32, "malformed"])
    def test_get_missing_or_malformed(self, client: TestClient, alice: str, missing: str) -> None:
        """Test unknown and malformed post ids return 404."""
        response = client.get(f"/api/posts/{missing}", headers=auth(alice))

        assert response.status_code == 404
        assert response.json() == {"msg": "Post not found"}


class TestDelete:
    def test_non_author_cannot_delete(
        self, client: TestClient, bob: str, alice: str, post_id: str
    ) -> None:
        """Test only the author may delete a post."""
        response = client.delete(f"/api/posts/{post_id}", headers=auth(bob))

        assert response.status_code == 401
        assert response.json() == {"msg": "User not authorized"}
        assert client.get(f"/api/posts/{post_id}", headers=auth(alice)).status_code == 200

    def test_author_deletes(self, client: TestClient, alice: str, post_id: str) -> None:
        """Test the author deletes their post."""
        response = client.delete(f"/api/posts/{post_id}", headers=auth(alice))

        assert response.status_code == 200
        assert response.json() == {"msg": "Post removed"}
        assert client.get(f"/api/posts/{post_id}", headers=auth(alice)).status_code == 404

    def test_delete_missing(self, client: TestClient, alice: str) -> None:
        """Test deleting an unknown post returns 404."""
        response = client.delete(f"/api/posts/{'0' * 32}", headers=auth(alice))
        assert response.status_code == 404


class TestLikes:
    def test_like_twice_is_rejected(
        self, client: TestClient, bob: str, alice: str, post_id: str
    ) -> None:
        """Test liking the same post twice fails and keeps one like."""
        first = client.put(f"/api/posts/like/{post_id}", headers=auth(bob))
        second = client.put(f"/api/posts/like/{post_id}", headers=auth(bob))

        assert first.status_code == 200
        assert [like["user"] for like in first.json()] == [verify_token(bob, TEST_SECRET)]
        assert second.status_code == 400
        assert second.json() == {"msg": "Post already liked"}
        post = client.get(f"/api/posts/{post_id}", headers=auth(alice)).json()
        assert len(post["likes"]) == 1

    def test_likes_are_newest_first(
        self, client: TestClient, bob: str, alice: str, post_id: str
    ) -> None:
        """Test likes are prepended."""
        client.put(f"/api/posts/like/{post_id}", headers=auth(alice))
        likes = client.put(f"/api/posts/like/{post_id}", headers=auth(bob)).json()

        users = [like["user"] for like in likes]
        assert users == [verify_token(bob, TEST_SECRET), verify_token(alice, TEST_SECRET)]

    def test_unlike_without_like(
        self, client: TestClient, bob: str, alice: str, post_id: str
    ) -> None:
        """Test unliking without a like fails and leaves likes unchanged."""
        client.put(f"/api/posts/like/{post_id}", headers=auth(alice))

        response = client.put(f"/api/posts/unlike/{post_id}", headers=auth(bob))

        assert response.status_code == 400
        assert response.json() == {"msg": "Post has not yet been liked"}
        post = client.get(f"/api/posts/{post_id}", headers=auth(alice)).json()
        assert [like["user"] for like in post["likes"]] == [verify_token(alice, TEST_SECRET)]

    def test_unlike_removes_only_own_like(
        self, client: TestClient, bob: str, alice: str, post_id: str
    ) -> None:
        """Test unliking removes only the caller's like."""
        client.put(f"/api/posts/like/{post_id}", headers=auth(alice))
        client.put(f"/api/posts/like/{post_id}", headers=auth(bob))

        response = client.put(f"/api/posts/unlike/{post_id}", headers=auth(bob))

        assert response.status_code == 200
        assert [like["user"] for like in response.json()] == [verify_token(alice, TEST_SECRET)]

    def test_like_missing_post(self, client: TestClient, bob: str) -> None:
        """Test liking an unknown post returns 404."""
        assert client.put(f"/api/posts/like/{'0' * 32}", headers=auth(bob)).status_code == 404


class TestComments:
    def test_add_comment_uses_stored_name_and_sent_avatar(
        self, client: TestClient, bob: str, post_id: str
    ) -> None:
        """Test comments take the stored name and the avatar sent in the body."""
        response = client.post(
            f"/api/posts/comment/{post_id}",
            json={"text": "nice", "name": "Mallory", "avatar": "//img/bob.png"},
            headers=auth(bob),
        )

        assert response.status_code == 200
        comments = response.json()
        assert len(comments) == 1
        assert comments[0]["text"] == "nice"
        assert comments[0]["name"] == "Bob"
        assert comments[0]["avatar"] == "//img/bob.png"
        assert comments[0]["user"] == verify_token(bob, TEST_SECRET)

    def test_comments_are_newest_first(self, client: TestClient, bob: str, post_id: str) -> None:
        """Test comments are prepended."""
        client.post(f"/api/posts/comment/{post_id}", json={"text": "one"}, headers=auth(bob))
        comments = client.post(
            f"/api/posts/comment/{post_id}", json={"text": "two"}, headers=auth(bob)
        ).json()

        assert [c["text"] for c in comments] == ["two", "one"]

    def test_comment_text_required(self, client: TestClient, bob: str, post_id: str) -> None:
        """Test comment text is required."""
        response = client.post(f"/api/posts/comment/{post_id}", json={}, headers=auth(bob))

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Text is required"

    def test_remove_comment(
        self, client: TestClient, bob: str, alice: str, post_id: str
    ) -> None:
        """Test only the commenter may remove a comment."""
        comment = client.post(
            f"/api/posts/comment/{post_id}", json={"text": "nice"}, headers=auth(bob)
        ).json()[0]

        forbidden = client.delete(
            f"/api/posts/comment/{post_id}/{comment['id']}", headers=auth(alice)
        )
        allowed = client.delete(f"/api/posts/comment/{post_id}/{comment['id']}", headers=auth(bob))

        assert forbidden.status_code == 401
        assert allowed.status_code == 200
        assert allowed.json() == []

    def test_remove_missing_comment(self, client: TestClient, bob: str, post_id: str) -> None:
        """Test removing an unknown comment returns 404."""
        response = client.delete(f"/api/posts/comment/{post_id}/nope", headers=auth(bob))

        assert response.status_code == 404
        assert response.json() == {"msg": "Comment does not exist"}
