"""Execution of linked node chains.

Running a node invokes the task registered for its kind and then moves on to
the node named by ``next_id``. A chain stops at its end, at a dangling link, on
revisiting a node, or after ``max_steps`` nodes.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Literal

from pydantic import BaseModel

from restdemo.core.exceptions import NotFoundError
from restdemo.models import BasicPayload, LogPayload, Node, StatusPayload
from restdemo.store.resource_store import ResourceStore

logger = logging.getLogger("restdemo.nodes")

HaltReason = Literal["end", "cycle", "missing", "limit"]


class NodeStep(BaseModel):
    id: str
    kind: str
    result: Any = None


class NodeRunResult(BaseModel):
    start_id: str
    steps: List[NodeStep]
    halted: HaltReason
    halted_at: str | None = None


def _run_basic(node: Node) -> Any:
    payload = BasicPayload.model_validate(node.payload)
    return payload.content


def _run_log(node: Node) -> Any:
    payload = LogPayload.model_validate(node.payload)
    logger.log(logging.getLevelName(payload.level.upper()), "[node %s] %s", node.id, payload.message)
    return {"logged": payload.message, "level": payload.level}


def _run_status(node: Node) -> Any:
    payload = StatusPayload.model_validate(node.payload)
    logger.info("[node %s] status: %s", node.id, payload.status)
    return {"status": payload.status}


NODE_TASKS: Dict[str, Callable[[Node], Any]] = {
    "basic": _run_basic,
    "log": _run_log,
    "status": _run_status,
}


def run_chain(store: ResourceStore[Node], start_id: str, *, max_steps: int) -> NodeRunResult:
    """Execute the chain beginning at ``start_id``.

    Raises `NotFoundError` when the start node does not exist; links that
    point nowhere later in the chain only halt it.
    """

    node = store.get(start_id)
    steps: List[NodeStep] = []
    visited = set()

    while True:
        visited.add(node.id)
        steps.append(NodeStep(id=node.id, kind=node.kind, result=NODE_TASKS[node.kind](node)))

        next_id = node.next_id
        if next_id is None:
            return NodeRunResult(start_id=start_id, steps=steps, halted="end")
        if next_id in visited:
            return NodeRunResult(start_id=start_id, steps=steps, halted="cycle", halted_at=next_id)
        if len(steps) >= max_steps:
            return NodeRunResult(start_id=start_id, steps=steps, halted="limit", halted_at=next_id)
        try:
            node = store.get(next_id)
        except NotFoundError:
            logger.warning("Node %s links to missing node %s", node.id, next_id)
            return NodeRunResult(start_id=start_id, steps=steps, halted="missing", halted_at=next_id)
