"""Node endpoints.

Nodes are typed by ``kind``; the payload is checked against the schema of
that kind before anything is stored, so an unknown kind or a malformed
payload is rejected with 422.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from restdemo.api.dependencies import get_node_store
from restdemo.core.config import settings
from restdemo.core.exceptions import ForbiddenError
from restdemo.models import Node
from restdemo.nodes.runtime import NodeRunResult, run_chain
from restdemo.store.resource_store import ResourceStore

logger = logging.getLogger("restdemo.api.node")

router = APIRouter(prefix="/node", tags=["node"])

NodeStore = ResourceStore[Node]


class NodeWriteRequest(BaseModel):
    kind: str = "basic"
    payload: Dict[str, Any] = Field(default_factory=dict)
    next_id: Optional[str] = None
    prev_id: Optional[str] = None


class NodeCreateRequest(NodeWriteRequest):
    id: Optional[str] = None


class NodeUpdateRequest(BaseModel):
    kind: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None
    next_id: Optional[str] = None
    prev_id: Optional[str] = None


def _new_node(node_id: str, payload: NodeWriteRequest) -> Node:
    data = payload.model_dump(exclude={"id"})
    data["id"] = node_id
    return Node.build(data)


@router.get("", response_model=List[Node])
async def list_nodes(store: NodeStore = Depends(get_node_store)) -> List[Node]:
    return store.list()


@router.post("", response_model=Node, status_code=status.HTTP_201_CREATED)
async def create_node(payload: NodeCreateRequest, store: NodeStore = Depends(get_node_store)) -> Node:
    node_id = payload.id or str(uuid.uuid4())
    logger.debug("POST /node id=%s kind=%s", node_id, payload.kind)
    return store.insert(node_id, _new_node(node_id, payload))


@router.put("", response_model=Node, status_code=status.HTTP_201_CREATED)
async def put_generated_node(payload: NodeWriteRequest, store: NodeStore = Depends(get_node_store)) -> Node:
    node_id = str(uuid.uuid4())
    logger.debug("PUT /node generated id=%s", node_id)
    node, _ = store.replace(node_id, _new_node(node_id, payload))
    return node


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_nodes() -> None:
    logger.warning("DELETE /node refused: clearing a collection is not allowed")
    raise ForbiddenError("Clearing the node collection is not allowed")


@router.get("/{node_id}", response_model=Node)
async def get_node(node_id: str, store: NodeStore = Depends(get_node_store)) -> Node:
    return store.get(node_id)


@router.post("/{node_id}", response_model=Node, status_code=status.HTTP_201_CREATED)
async def create_node_at(node_id: str, payload: NodeWriteRequest, store: NodeStore = Depends(get_node_store)) -> Node:
    logger.debug("POST /node/%s kind=%s", node_id, payload.kind)
    return store.insert(node_id, _new_node(node_id, payload))


@router.put("/{node_id}", response_model=Node)
async def replace_node(
    node_id: str,
    payload: NodeWriteRequest,
    response: Response,
    store: NodeStore = Depends(get_node_store),
) -> Node:
    logger.debug("PUT /node/%s kind=%s", node_id, payload.kind)
    node, created = store.replace(node_id, _new_node(node_id, payload))
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return node


@router.patch("/{node_id}", response_model=Node)
async def update_node(node_id: str, payload: NodeUpdateRequest, store: NodeStore = Depends(get_node_store)) -> Node:
    logger.debug("PATCH /node/%s", node_id)
    return store.merge(node_id, payload.model_dump(exclude_unset=True))


@router.delete("/{node_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_node(node_id: str, store: NodeStore = Depends(get_node_store)) -> None:
    logger.debug("DELETE /node/%s", node_id)
    store.remove(node_id)


@router.post("/{node_id}/run", response_model=NodeRunResult)
async def run_node(node_id: str, store: NodeStore = Depends(get_node_store)) -> NodeRunResult:
    """Run the node and every node reachable through ``next_id``."""

    result = run_chain(store, node_id, max_steps=settings.NODE_RUN_MAX_STEPS)
    logger.info("Node chain from %s ran %d step(s), halted: %s", node_id, len(result.steps), result.halted)
    return result
