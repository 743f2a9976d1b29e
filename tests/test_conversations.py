"""Tests for conversation CRUD endpoints."""

import uuid


def _create(client, headers, **body):
    resp = client.post("/api/v1/conversations", json=body, headers=headers)
    assert resp.status_code == 201
    return resp.json()["data"]


def test_create_conversation_defaults(client, auth_header, user_id):
    conv = _create(client, auth_header)
    assert conv["title"] == "New Conversation"
    assert conv["subject"] == "general"
    assert conv["user_id"] == user_id


def test_create_conversation_with_subject(client, auth_header):
    conv = _create(client, auth_header, title="Algebra", subject="math")
    assert conv["title"] == "Algebra"
    assert conv["subject"] == "math"


def test_create_conversation_invalid_subject(client, auth_header):
    resp = client.post("/api/v1/conversations", json={"subject": "astrology"}, headers=auth_header)
    assert resp.status_code == 422
    assert resp.json()["type"] == "validation_error"


def test_create_conversation_no_auth(client):
    resp = client.post("/api/v1/conversations", json={"title": "No Auth"})
    assert resp.status_code == 401


def test_list_conversations_with_preview(client, auth_header, services):
    first = _create(client, auth_header, title="First")
    second = _create(client, auth_header, title="Second")
    services.messages.append(second["id"], "user", "Explain the causes of the First World War in as much detail as you can")

    resp = client.get("/api/v1/conversations", headers=auth_header)
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 2
    assert [c["id"] for c in body["data"]] == [second["id"], first["id"]]
    assert body["data"][0]["preview"] == "Explain the causes of the First World War in as much detail ..."
    assert body["data"][1]["preview"] == "No messages yet"
    assert "chat_messages" not in body["data"][0]


def test_list_only_own_conversations(client, auth_header, other_auth_header):
    _create(client, auth_header)
    resp = client.get("/api/v1/conversations", headers=other_auth_header)
    assert resp.json()["total"] == 0


def test_latest_conversation(client, auth_header):
    assert client.get("/api/v1/conversations/latest", headers=auth_header).json()["data"] is None

    _create(client, auth_header, title="Older")
    newer = _create(client, auth_header, title="Newer")
    resp = client.get("/api/v1/conversations/latest", headers=auth_header)
    assert resp.json()["data"]["id"] == newer["id"]


def test_get_conversation(client, auth_header):
    conv = _create(client, auth_header, title="Get Test")

    resp = client.get(f"/api/v1/conversations/{conv['id']}", headers=auth_header)
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == conv["id"]
    assert resp.json()["data"]["messages"] == []


def test_get_conversation_not_found(client, auth_header):
    resp = client.get(f"/api/v1/conversations/{uuid.uuid4()}", headers=auth_header)
    assert resp.status_code == 404
    assert resp.json()["type"] == "not_found"


def test_update_conversation(client, auth_header):
    conv = _create(client, auth_header, title="Original")

    resp = client.patch(f"/api/v1/conversations/{conv['id']}", json={"title": "Updated", "subject": "science"}, headers=auth_header)
    assert resp.status_code == 200
    assert resp.json()["data"]["title"] == "Updated"
    assert resp.json()["data"]["subject"] == "science"
    assert resp.json()["data"]["updated_at"] > conv["updated_at"]


def test_empty_update_is_noop(client, auth_header):
    conv = _create(client, auth_header)
    resp = client.patch(f"/api/v1/conversations/{conv['id']}", json={}, headers=auth_header)
    assert resp.json()["data"] == conv


def test_delete_conversation_removes_messages(client, auth_header, services):
    conv = _create(client, auth_header, title="Delete Me")
    services.messages.append(conv["id"], "user", "hello")
    services.messages.append(conv["id"], "assistant", "hi there")

    resp = client.delete(f"/api/v1/conversations/{conv['id']}", headers=auth_header)
    assert resp.status_code == 204

    assert client.get(f"/api/v1/conversations/{conv['id']}", headers=auth_header).status_code == 404
    assert services.messages.list_by_conversation(conv["id"]) == []


def test_ownership_check(client, auth_header, other_auth_header):
    conv = _create(client, auth_header, title="Private")

    assert client.get(f"/api/v1/conversations/{conv['id']}", headers=other_auth_header).status_code == 403
    assert client.delete(f"/api/v1/conversations/{conv['id']}", headers=other_auth_header).status_code == 403
    assert client.get(f"/api/v1/conversations/{conv['id']}/messages", headers=other_auth_header).status_code == 403
