def test_key_value_lifecycle_scenario(client):
    created = client.post("/rest", json={"key": "a", "value": "1"})
    assert created.status_code == 201
    assert created.json() == {"key": "a", "value": "1"}

    fetched = client.get("/rest/a")
    assert fetched.status_code == 200
    assert fetched.json()["value"] == "1"

    patched = client.patch("/rest/a", json={"value": "2"})
    assert patched.status_code == 200
    assert client.get("/rest/a").json()["value"] == "2"

    assert client.delete("/rest/a").status_code == 204
    assert client.get("/rest/a").status_code == 404


def test_post_without_key_generates_one(client):
    response = client.post("/rest", json={"value": {"nested": True}})
    assert response.status_code == 201
    key = response.json()["key"]
    assert client.get(f"/rest/{key}").json() == {"key": key, "value": {"nested": True}}


def test_post_conflict_returns_existing_pair(client):
    client.post("/rest", json={"key": "a", "value": "first"})
    response = client.post("/rest", json={"key": "a", "value": "second"})

    assert response.status_code == 409
    body = response.json()
    assert body["code"] == "conflict"
    assert body["details"]["resource"] == {"key": "a", "value": "first"}


def test_post_on_item_path_uses_path_key(client):
    assert client.post("/rest/b", json={"value": 3}).status_code == 201
    assert client.post("/rest/b", json={"value": 4}).status_code == 409
    assert client.get("/rest/b").json() == {"key": "b", "value": 3}


def test_put_on_item_path_ignores_body_key(client):
    response = client.put("/rest/c", json={"key": "other", "value": 1})
    assert response.status_code == 201
    assert response.json() == {"key": "c", "value": 1}
    assert client.get("/rest/other").status_code == 404


def test_put_on_collection_generates_key(client):
    response = client.put("/rest", json={"value": "anon"})
    assert response.status_code == 201
    assert client.get(f"/rest/{response.json()['key']}").status_code == 200


def test_patch_without_fields_keeps_value(client):
    client.post("/rest", json={"key": "a", "value": [1, 2]})
    response = client.patch("/rest/a", json={})
    assert response.status_code == 200
    assert response.json() == {"key": "a", "value": [1, 2]}


def test_invalid_key_is_rejected(client):
    response = client.post("/rest", json={"key": "has space", "value": 1})
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_clearing_collection_is_forbidden(client):
    client.post("/rest", json={"key": "a", "value": 1})
    response = client.delete("/rest")
    assert response.status_code == 403
    assert client.get("/rest").json() == [{"key": "a", "value": 1}]


def test_list_returns_all_pairs(client):
    client.post("/rest", json={"key": "x", "value": 1})
    client.post("/rest", json={"key": "y", "value": 2})
    assert client.get("/rest").json() == [{"key": "x", "value": 1}, {"key": "y", "value": 2}]
