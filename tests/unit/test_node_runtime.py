import logging

import pytest

from restdemo.core.exceptions import NotFoundError
from restdemo.models import Node
from restdemo.nodes.runtime import run_chain
from restdemo.store.resource_store import ResourceStore


@pytest.fixture
def nodes():
    return ResourceStore("node")


def add(store, node_id, kind="basic", payload=None, next_id=None):
    store.insert(node_id, Node.build({"id": node_id, "kind": kind, "payload": payload or {}, "next_id": next_id}))


def test_runs_linked_chain_to_the_end(nodes, caplog):
    add(nodes, "a", "basic", {"content": 1}, next_id="b")
    add(nodes, "b", "log", {"message": "from b", "level": "warning"}, next_id="c")
    add(nodes, "c", "status", {"status": "done"})

    with caplog.at_level(logging.INFO, logger="restdemo.nodes"):
        result = run_chain(nodes, "a", max_steps=10)

    assert result.halted == "end"
    assert [step.id for step in result.steps] == ["a", "b", "c"]
    assert result.steps[0].result == 1
    assert result.steps[1].result == {"logged": "from b", "level": "warning"}
    assert result.steps[2].result == {"status": "done"}
    assert "from b" in caplog.text


def test_stops_on_cycle(nodes):
    add(nodes, "a", next_id="b")
    add(nodes, "b", next_id="a")

    result = run_chain(nodes, "a", max_steps=10)

    assert result.halted == "cycle"
    assert result.halted_at == "a"
    assert len(result.steps) == 2


def test_stops_on_dangling_link(nodes):
    add(nodes, "a", next_id="ghost")

    result = run_chain(nodes, "a", max_steps=10)

    assert result.halted == "missing"
    assert result.halted_at == "ghost"


def test_stops_at_step_limit(nodes):
    for index in range(5):
        add(nodes, f"n{index}", next_id=f"n{index + 1}")

    result = run_chain(nodes, "n0", max_steps=3)

    assert result.halted == "limit"
    assert [step.id for step in result.steps] == ["n0", "n1", "n2"]


def test_missing_start_node_raises(nodes):
    with pytest.raises(NotFoundError):
        run_chain(nodes, "nope", max_steps=3)
