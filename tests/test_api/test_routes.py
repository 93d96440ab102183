# tests/test_api/test_routes.py
import pytest
from fastapi.testclient import TestClient

from api.main import create_app


@pytest.fixture
def client(settings, database):
    with TestClient(create_app(settings, database)) as test_client:
        yield test_client


def register_and_login(client, handle: str, password: str = "hunter22") -> dict:
    response = client.post("/api/auth/register", json={"handle": handle, "password": password})
    assert response.status_code == 201
    response = client.post("/api/auth/login", json={"handle": handle, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def alice_headers(client):
    return register_and_login(client, "alice")


@pytest.fixture
def bob_headers(client):
    return register_and_login(client, "bob")


@pytest.fixture
def dune_id(client, alice_headers):
    response = client.post("/api/books", headers=alice_headers, json={
        "title": "Dune",
        "author": "Frank Herbert",
        "description": "Paperback",
        "sharing_options": {"for_exchange": True},
    })
    assert response.status_code == 201
    return response.json()["id"]


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200


def test_register_duplicate_and_bad_login(client):
    register_and_login(client, "alice")

    response = client.post("/api/auth/register", json={"handle": "alice", "password": "hunter22"})
    assert response.status_code == 400

    response = client.post("/api/auth/login", json={"handle": "alice", "password": "wrong-one"})
    assert response.status_code == 401
    assert response.json()["error"] == "AuthError"


@pytest.mark.parametrize("authorization", [None, "Bearer", "Basic abc", "Bearer not-a-token"])
def test_requires_valid_token(client, authorization):
    headers = {"Authorization": authorization} if authorization else {}
    response = client.get("/api/books", headers=headers)

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_create_and_get_book(client, alice_headers, dune_id):
    response = client.get(f"/api/books/{dune_id}", headers=alice_headers)
    assert response.status_code == 200

    book = response.json()
    assert book["title"] == "Dune"
    assert book["owner"]["handle"] == "alice"
    assert book["sharing_options"]["for_exchange"] is True
    assert book["sharing_options"]["for_sale"] is False
    assert book["liked_by"] == []


def test_list_books_paginates(client, alice_headers, dune_id):
    client.post("/api/books", headers=alice_headers, json={
        "title": "Emma", "author": "Jane Austen", "description": "Hardcover",
    })

    response = client.get("/api/books", headers=alice_headers, params={"size": 1})
    assert response.status_code == 200
    body = response.json()
    assert body["total_items"] == 2
    assert body["total_pages"] == 2
    assert [b["title"] for b in body["data"]] == ["Emma"]

    response = client.get("/api/books", headers=alice_headers, params={"query": "dun"})
    assert [b["title"] for b in response.json()["data"]] == ["Dune"]


def test_missing_book(client, alice_headers):
    response = client.get("/api/books/999", headers=alice_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"


def test_like_opens_chat_room(client, alice_headers, bob_headers, dune_id):
    response = client.post(f"/api/books/{dune_id}/like", headers=bob_headers)
    assert response.status_code == 200

    body = response.json()
    assert body["ownerDisplayHandle"] == "alice"
    assert isinstance(body["chatRoomId"], int)
    assert len(body["messages"]) == 1
    message = body["messages"][0]
    assert message["senderDisplayHandle"] == "bob"
    assert "Dune" in message["text"]
    assert "T" in message["timestampIso8601"]

    again = client.post(f"/api/books/{dune_id}/like", headers=bob_headers)
    assert again.status_code == 409
    assert again.json()["error"] == "AlreadyLiked"

    book = client.get(f"/api/books/{dune_id}", headers=alice_headers).json()
    assert [u["handle"] for u in book["liked_by"]] == ["bob"]


def test_cannot_like_own_book(client, alice_headers, dune_id):
    response = client.post(f"/api/books/{dune_id}/like", headers=alice_headers)
    assert response.status_code == 400


def test_chat_flow(client, alice_headers, bob_headers, dune_id):
    room_id = client.post(f"/api/books/{dune_id}/like", headers=bob_headers).json()["chatRoomId"]

    response = client.post(f"/api/chatrooms/{room_id}/messages", headers=alice_headers, json={"text": "Swap?"})
    assert response.status_code == 201
    assert response.json()["senderDisplayHandle"] == "alice"

    response = client.get(f"/api/chatrooms/{room_id}/messages", headers=bob_headers)
    assert response.status_code == 200
    assert [m["senderDisplayHandle"] for m in response.json()] == ["bob", "alice"]

    rooms = client.get("/api/chatrooms", headers=alice_headers).json()
    assert len(rooms) == 1
    assert rooms[0]["chatRoomId"] == room_id
    assert rooms[0]["partnerDisplayHandle"] == "bob"
    assert rooms[0]["lastMessage"]["text"] == "Swap?"

    response = client.post(f"/api/chatrooms/{room_id}/messages", headers=alice_headers, json={"text": "   "})
    assert response.status_code == 400


def test_outsider_cannot_read_or_write_room(client, bob_headers, dune_id):
    room_id = client.post(f"/api/books/{dune_id}/like", headers=bob_headers).json()["chatRoomId"]
    carol_headers = register_and_login(client, "carol")

    assert client.get(f"/api/chatrooms/{room_id}/messages", headers=carol_headers).status_code == 403
    response = client.post(f"/api/chatrooms/{room_id}/messages", headers=carol_headers, json={"text": "hi"})
    assert response.status_code == 403

    assert client.get("/api/chatrooms/999/messages", headers=carol_headers).status_code == 404


def test_only_owner_updates_and_deletes(client, alice_headers, bob_headers, dune_id):
    response = client.patch(f"/api/books/{dune_id}", headers=bob_headers, json={"title": "Mine"})
    assert response.status_code == 403

    response = client.patch(f"/api/books/{dune_id}", headers=alice_headers, json={
        "description": "Signed",
        "sharing_options": {"for_sale": True},
    })
    assert response.status_code == 200
    book = response.json()
    assert book["description"] == "Signed"
    assert book["sharing_options"]["for_sale"] is True
    assert book["sharing_options"]["for_exchange"] is True

    assert client.delete(f"/api/books/{dune_id}", headers=bob_headers).status_code == 403
    assert client.delete(f"/api/books/{dune_id}", headers=alice_headers).status_code == 204
    assert client.get(f"/api/books/{dune_id}", headers=alice_headers).status_code == 404
