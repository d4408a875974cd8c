import pytest

from restdemo.core.exceptions import ValidationError
from restdemo.models import KeyValue, Node, Todo


def test_key_value_rejects_slash_in_key():
    with pytest.raises(ValidationError) as excinfo:
        KeyValue.build({"key": "a/b", "value": 1})
    assert excinfo.value.status_code == 422
    assert excinfo.value.details["errors"][0]["loc"] == ("key",)


def test_key_value_accepts_arbitrary_json_value():
    pair = KeyValue.build({"key": "cfg", "value": {"nested": [1, 2, {"x": None}]}})
    assert pair.value == {"nested": [1, 2, {"x": None}]}


def test_todo_text_is_trimmed_and_required():
    todo = Todo.build({"id": "t1", "text": "  buy milk  "})
    assert todo.text == "buy milk"
    assert todo.completed is False

    with pytest.raises(ValidationError):
        Todo.build({"id": "t2", "text": ""})


def test_todo_merge_cannot_rewrite_timestamps_or_id():
    todo = Todo.build({"id": "t1", "text": "original"})
    merged = todo.merge({"id": "other", "created_at": "2000-01-01T00:00:00Z", "text": "changed"})

    assert merged.id == "t1"
    assert merged.created_at == todo.created_at
    assert merged.text == "changed"
    assert merged.updated_at >= todo.updated_at


def test_node_defaults_to_basic_kind():
    node = Node.build({"id": "n1"})
    assert node.kind == "basic"
    assert node.payload == {"content": None}


def test_node_payload_is_normalized_for_kind():
    node = Node.build({"id": "n1", "kind": "log", "payload": {"message": "hello"}})
    assert node.payload == {"message": "hello", "level": "info"}


@pytest.mark.parametrize(
    "data",
    [
        {"id": "n1", "kind": "unknown"},
        {"id": "n1", "kind": "log", "payload": {}},
        {"id": "n1", "kind": "log", "payload": {"message": "hi", "level": "loud"}},
        {"id": "n1", "kind": "status", "payload": {"status": 42}},
    ],
)
def test_node_rejects_invalid_payloads(data):
    with pytest.raises(ValidationError):
        Node.build(data)


def test_node_merge_revalidates_against_new_kind():
    node = Node.build({"id": "n1", "kind": "basic", "payload": {"content": "x"}})

    with pytest.raises(ValidationError):
        node.merge({"kind": "log"})

    switched = node.merge({"kind": "status", "payload": {"status": "idle"}})
    assert switched.kind == "status"
    assert switched.payload == {"status": "idle"}
