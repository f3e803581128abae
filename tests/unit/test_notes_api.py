"""
Notes API Unit Tests

HTTP contract of /notes: status codes, exact response bodies and camelCase
serialization. Runs without Docker, the lifespan infrastructure is mocked and
routes are served from an in-memory store.
"""

import uuid

from mail_notes.main import create_app


def test_note_lifecycle(client):
    """Create -> list -> delete -> list for one message."""
    res_post = client.post("/notes", json={"messageId": "m1", "text": "hello"})
    assert res_post.status_code == 201
    note = res_post.json()["note"]
    assert note["tagColor"] == "#fbbc04"
    assert note["snippetKey"] is None

    res_list = client.get("/notes", params={"messageId": "m1"})
    assert res_list.status_code == 200
    assert res_list.json() == {"notes": [note]}

    res_delete = client.delete(f"/notes/{note['id']}")
    assert res_delete.status_code == 200
    assert res_delete.json() == {"ok": True}

    res_after = client.get("/notes", params={"messageId": "m1"})
    assert res_after.json() == {"notes": []}


def test_created_note_shape(client):
    """The response is the persisted note, camelCase, with every field set."""
    res = client.post(
        "/notes",
        json={"messageId": "m1", "text": "hello", "snippetKey": "s1", "createdBy": "bo"},
    )

    note = res.json()["note"]
    assert set(note) == {
        "id",
        "messageId",
        "text",
        "tagName",
        "tagColor",
        "snippetKey",
        "createdBy",
        "createdAt",
    }
    assert uuid.UUID(note["id"])
    assert note["tagName"] == "note"
    assert note["snippetKey"] == "s1"
    assert note["createdBy"] == "bo"
    assert note["createdAt"]


def test_create_accepts_legacy_color(client):
    res = client.post("/notes", json={"messageId": "m1", "text": "x", "color": "yellow"})

    assert res.status_code == 201
    assert res.json()["note"]["tagColor"] == "yellow"


def test_list_requires_message_id(client, memory_store):
    """Missing messageId is rejected before the store is queried."""
    for params in ({}, {"messageId": ""}):
        res = client.get("/notes", params=params)
        assert res.status_code == 400
        assert res.json() == {"error": "messageId is required"}

    assert memory_store.calls["list_by_message_id"] == 0


def test_create_requires_message_id_and_text(client, memory_store):
    payloads = [{}, {"messageId": "m1"}, {"text": "hello"}, {"messageId": "", "text": "x"}]

    for payload in payloads:
        res = client.post("/notes", json=payload)
        assert res.status_code == 400
        assert res.json() == {"error": "messageId and text are required"}

    assert len(memory_store) == 0


def test_create_without_body(client, memory_store):
    res = client.post("/notes")

    assert res.status_code == 400
    assert res.json() == {"error": "messageId and text are required"}
    assert len(memory_store) == 0


def test_malformed_body_is_client_error(client, memory_store):
    """Invalid JSON is a 400, not FastAPI's default 422."""
    res = client.post(
        "/notes", content="{not json", headers={"Content-Type": "application/json"}
    )

    assert res.status_code == 400
    assert res.json() == {"error": "Invalid request"}
    assert len(memory_store) == 0


def test_list_is_scoped_and_ordered(client):
    for message_id, text in [("m1", "first"), ("m2", "other"), ("m1", "second")]:
        client.post("/notes", json={"messageId": message_id, "text": text})

    notes = client.get("/notes", params={"messageId": "m1"}).json()["notes"]

    assert [n["text"] for n in notes] == ["first", "second"]
    assert notes[0]["createdAt"] <= notes[1]["createdAt"]


def test_delete_twice_is_ok(client, memory_store):
    note_id = client.post("/notes", json={"messageId": "m1", "text": "x"}).json()["note"]["id"]

    assert client.delete(f"/notes/{note_id}").json() == {"ok": True}
    assert client.delete(f"/notes/{note_id}").json() == {"ok": True}
    assert memory_store.calls["delete_by_id"] == 2


def test_delete_rejects_malformed_id(client):
    res = client.delete("/notes/not-a-uuid")

    assert res.status_code == 400
    assert res.json() == {"error": "id must be a valid UUID"}


def test_store_failure_returns_generic_500(client_factory, failing_store):
    """Store errors never leak details to the caller."""
    with client_factory(create_app(), failing_store) as failing_client:
        responses = [
            failing_client.get("/notes", params={"messageId": "m1"}),
            failing_client.post("/notes", json={"messageId": "m1", "text": "x"}),
            failing_client.delete(f"/notes/{uuid.uuid4()}"),
        ]

    for res in responses:
        assert res.status_code == 500
        assert res.json() == {"error": "Internal server error"}


def test_cors_allows_extension_origin(client):
    res = client.get(
        "/notes",
        params={"messageId": "m1"},
        headers={"Origin": "chrome-extension://abcdefghijklmnop"},
    )

    assert res.headers["access-control-allow-origin"] == "*"
