"""Tests for the HTTP API."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from circle.config import CircleConfig
from circle.server.app import create_app
from circle.service import SocialService
from circle.store import SocialStore


@pytest.fixture
def client(store_path: Path):
    service = SocialService(store=SocialStore(store_path))
    app = create_app(service, CircleConfig())
    with TestClient(app) as test_client:
        yield test_client


def register(client: TestClient, username: str) -> dict:
    response = client.post(
        "/api/register", json={"username": username, "password": "pw"}
    )
    assert response.status_code == 200
    return response.json()["user"]


def as_user(user: dict) -> dict[str, str]:
    return {"x-user-id": user["id"]}


class TestHealth:
    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_ready_after_startup(self, client: TestClient, store_path: Path):
        assert store_path.exists()
        assert client.get("/ready").json() == {"status": "ready"}

    def test_not_ready_before_store_opens(self, store_path: Path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{}")
        app = create_app(SocialService(store=SocialStore(store_path)), CircleConfig())

        # No lifespan without the context manager, so the store stays closed
        assert TestClient(app).get("/ready").json() == {"status": "starting"}


class TestAccounts:
    def test_register_returns_public_view(self, client: TestClient):
        user = register(client, "alice")
        assert set(user) == {"id", "username", "avatar", "avatarImage"}
        assert user["avatar"] == "A"

    def test_register_duplicate(self, client: TestClient):
        register(client, "alice")
        response = client.post(
            "/api/register", json={"username": "alice", "password": "x"}
        )
        assert response.status_code == 409
        assert response.json()["code"] == "username_taken"

    def test_register_missing_fields(self, client: TestClient):
        response = client.post("/api/register", json={"username": "alice"})
        assert response.status_code == 400

    def test_login(self, client: TestClient):
        user = register(client, "alice")
        response = client.post(
            "/api/login", json={"username": "alice", "password": "pw"}
        )
        assert response.json()["user"] == user

        response = client.post(
            "/api/login", json={"username": "alice", "password": "bad"}
        )
        assert response.status_code == 401
        assert response.json() == {
            "error": "Invalid username or password",
            "code": "invalid_credentials",
        }

    def test_missing_identity(self, client: TestClient):
        assert client.get("/api/me").status_code == 401
        assert client.get("/api/me", headers={"x-user-id": "nobody"}).status_code == 401

    def test_avatar_update(self, client: TestClient):
        user = register(client, "alice")
        response = client.post(
            "/api/me/avatar",
            json={"avatarImage": "data:image/png;base64,AA"},
            headers=as_user(user),
        )
        assert response.json() == {
            "success": True,
            "avatarImage": "data:image/png;base64,AA",
        }
        me = client.get("/api/me", headers=as_user(user)).json()
        assert me["avatarImage"] == "data:image/png;base64,AA"


class TestFriends:
    def test_request_accept_flow(self, client: TestClient):
        alice = register(client, "alice")
        bob = register(client, "bob")

        response = client.post(
            "/api/friend-requests", json={"toUserId": bob["id"]}, headers=as_user(alice)
        )
        assert response.json() == {"success": True}
        requests = client.get("/api/friend-requests", headers=as_user(bob)).json()
        assert requests == {"sent": [], "received": [alice["id"]]}

        client.post(
            f"/api/friend-requests/{alice['id']}/accept", headers=as_user(bob)
        )
        friends = client.get("/api/friends", headers=as_user(alice)).json()
        assert friends == [bob]
        assert "password" not in friends[0]

    def test_decline(self, client: TestClient):
        alice = register(client, "alice")
        bob = register(client, "bob")
        client.post(
            "/api/friend-requests", json={"toUserId": bob["id"]}, headers=as_user(alice)
        )
        response = client.post(
            f"/api/friend-requests/{alice['id']}/decline", headers=as_user(bob)
        )
        assert response.json() == {"success": True}
        assert client.get("/api/friend-requests", headers=as_user(alice)).json() == {
            "sent": [],
            "received": [],
        }

    def test_request_errors(self, client: TestClient):
        alice = register(client, "alice")
        headers = as_user(alice)

        missing = client.post("/api/friend-requests", json={}, headers=headers)
        assert missing.status_code == 400
        unknown = client.post(
            "/api/friend-requests", json={"toUserId": "nobody"}, headers=headers
        )
        assert unknown.status_code == 404
        to_self = client.post(
            "/api/friend-requests", json={"toUserId": alice["id"]}, headers=headers
        )
        assert to_self.json()["code"] == "invalid_target"


class TestChats:
    def test_conversation(self, client: TestClient):
        alice = register(client, "alice")
        bob = register(client, "bob")
        client.post(f"/api/friend-requests/{bob['id']}/accept", headers=as_user(alice))

        sent = client.post(
            f"/api/chats/{bob['id']}/message",
            json={"text": "hi"},
            headers=as_user(alice),
        ).json()
        assert sent["type"] == "text"
        assert sent["senderId"] == alice["id"]

        client.post(
            f"/api/chats/{alice['id']}/voice",
            json={"audioData": "data:audio/webm;base64,AA"},
            headers=as_user(bob),
        )
        messages = client.get(f"/api/chats/{bob['id']}", headers=as_user(alice)).json()
        assert [m["type"] for m in messages] == ["text", "voice"]

        chats = client.get("/api/chats", headers=as_user(alice)).json()
        assert chats[0]["friend"]["id"] == bob["id"]
        assert chats[0]["lastMessage"]["audioData"] == "data:audio/webm;base64,AA"

    def test_empty_message(self, client: TestClient):
        alice = register(client, "alice")
        bob = register(client, "bob")
        response = client.post(
            f"/api/chats/{bob['id']}/message", json={"text": ""}, headers=as_user(alice)
        )
        assert response.status_code == 400
        assert response.json()["code"] == "empty_payload"


class TestPosts:
    def test_feed_flow(self, client: TestClient):
        alice = register(client, "alice")
        bob = register(client, "bob")

        post = client.post(
            "/api/posts", json={"text": "hello"}, headers=as_user(alice)
        ).json()
        assert post["author"] == "alice"

        like = client.post(f"/api/posts/{post['id']}/like", headers=as_user(bob))
        assert like.json() == {"likes": [bob["id"]]}

        comment = client.post(
            f"/api/posts/{post['id']}/comment",
            json={"text": "nice"},
            headers=as_user(bob),
        ).json()
        assert comment["author"] == "bob"

        (listed,) = client.get("/api/posts", headers=as_user(bob)).json()
        assert listed["likes"] == [bob["id"]]
        assert listed["comments"] == [comment]

    def test_post_errors(self, client: TestClient):
        alice = register(client, "alice")
        headers = as_user(alice)

        assert client.post("/api/posts", json={}, headers=headers).status_code == 400
        missing = client.post(
            "/api/posts/missing/comment", json={"text": ""}, headers=headers
        )
        assert missing.status_code == 404
        assert missing.json()["code"] == "post_not_found"
