from __future__ import annotations

from fastapi import Request

from restdemo.models import KeyValue, Node, Todo
from restdemo.orchestration.sessions import OnlineSessions
from restdemo.store.registry import StoreRegistry
from restdemo.store.resource_store import ResourceStore


def get_stores(request: Request) -> StoreRegistry:
    return request.app.state.stores


def get_kv_store(request: Request) -> ResourceStore[KeyValue]:
    return get_stores(request).kv


def get_todo_store(request: Request) -> ResourceStore[Todo]:
    return get_stores(request).todos


def get_node_store(request: Request) -> ResourceStore[Node]:
    return get_stores(request).nodes


def get_sessions(request: Request) -> OnlineSessions:
    return request.app.state.sessions
