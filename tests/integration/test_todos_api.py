from datetime import datetime


def parse_ts(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_create_todo_defaults(client):
    response = client.post("/todos", json={"text": "water plants"})

    assert response.status_code == 201
    body = response.json()
    assert body["text"] == "water plants"
    assert body["completed"] is False
    assert body["created_at"] == body["updated_at"]
    assert client.get(f"/todos/{body['id']}").json() == body


def test_missing_text_is_rejected(client):
    assert client.post("/todos", json={"completed": True}).status_code == 422
    assert client.post("/todos", json={"text": "   "}).status_code == 422


def test_patch_toggles_completion_only(client):
    todo = client.post("/todos", json={"id": "t1", "text": "ship release"}).json()

    response = client.patch("/todos/t1", json={"completed": True})

    assert response.status_code == 200
    body = response.json()
    assert body["completed"] is True
    assert body["text"] == "ship release"
    assert body["created_at"] == todo["created_at"]
    assert parse_ts(body["updated_at"]) >= parse_ts(todo["updated_at"])


def test_put_overwrite_keeps_created_at(client):
    first = client.put("/todos/t1", json={"text": "draft"})
    assert first.status_code == 201

    second = client.put("/todos/t1", json={"text": "final", "completed": True})
    assert second.status_code == 200
    assert second.json()["created_at"] == first.json()["created_at"]
    assert client.get("/todos/t1").json()["text"] == "final"


def test_put_replaces_unspecified_fields_with_defaults(client):
    client.post("/todos", json={"id": "t1", "text": "a", "completed": True})
    response = client.put("/todos/t1", json={"text": "b"})
    assert response.json()["completed"] is False
