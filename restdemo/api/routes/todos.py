"""TODO item endpoints."""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from restdemo.api.dependencies import get_todo_store
from restdemo.core.exceptions import ForbiddenError
from restdemo.models import Todo
from restdemo.models.todo import utcnow
from restdemo.store.resource_store import ResourceStore

logger = logging.getLogger("restdemo.api.todos")

router = APIRouter(prefix="/todos", tags=["todos"])

TodoStore = ResourceStore[Todo]


class TodoCreateRequest(BaseModel):
    id: Optional[str] = None
    text: str
    completed: bool = False


class TodoReplaceRequest(BaseModel):
    text: str
    completed: bool = False


class TodoUpdateRequest(BaseModel):
    text: Optional[str] = None
    completed: Optional[bool] = None


def _new_todo(todo_id: str, text: str, completed: bool) -> Todo:
    now = utcnow()
    return Todo.build({"id": todo_id, "text": text, "completed": completed, "created_at": now, "updated_at": now})


@router.get("", response_model=List[Todo])
async def list_todos(store: TodoStore = Depends(get_todo_store)) -> List[Todo]:
    return store.list()


@router.post("", response_model=Todo, status_code=status.HTTP_201_CREATED)
async def create_todo(payload: TodoCreateRequest, store: TodoStore = Depends(get_todo_store)) -> Todo:
    todo_id = payload.id or str(uuid.uuid4())
    logger.debug("POST /todos id=%s", todo_id)
    return store.insert(todo_id, _new_todo(todo_id, payload.text, payload.completed))


@router.put("", response_model=Todo, status_code=status.HTTP_201_CREATED)
async def put_generated_todo(payload: TodoReplaceRequest, store: TodoStore = Depends(get_todo_store)) -> Todo:
    todo_id = str(uuid.uuid4())
    logger.debug("PUT /todos generated id=%s", todo_id)
    todo, _ = store.replace(todo_id, _new_todo(todo_id, payload.text, payload.completed))
    return todo


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_todos() -> None:
    logger.warning("DELETE /todos refused: clearing a collection is not allowed")
    raise ForbiddenError("Clearing the todos collection is not allowed")


@router.get("/{todo_id}", response_model=Todo)
async def get_todo(todo_id: str, store: TodoStore = Depends(get_todo_store)) -> Todo:
    return store.get(todo_id)


@router.post("/{todo_id}", response_model=Todo, status_code=status.HTTP_201_CREATED)
async def create_todo_at(todo_id: str, payload: TodoReplaceRequest, store: TodoStore = Depends(get_todo_store)) -> Todo:
    logger.debug("POST /todos/%s", todo_id)
    return store.insert(todo_id, _new_todo(todo_id, payload.text, payload.completed))


@router.put("/{todo_id}", response_model=Todo)
async def replace_todo(
    todo_id: str,
    payload: TodoReplaceRequest,
    response: Response,
    store: TodoStore = Depends(get_todo_store),
) -> Todo:
    """Create or overwrite a TODO; an overwrite keeps the original ``created_at``."""

    logger.debug("PUT /todos/%s", todo_id)
    replacement = _new_todo(todo_id, payload.text, payload.completed)

    def build(existing: Optional[Todo]) -> Todo:
        if existing is None:
            return replacement
        return replacement.model_copy(update={"created_at": existing.created_at, "updated_at": utcnow()})

    todo, created = store.upsert(todo_id, build)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return todo


@router.patch("/{todo_id}", response_model=Todo)
async def update_todo(todo_id: str, payload: TodoUpdateRequest, store: TodoStore = Depends(get_todo_store)) -> Todo:
    """Partially update a TODO, e.g. `{"completed": true}` to mark it done."""

    logger.debug("PATCH /todos/%s", todo_id)
    return store.merge(todo_id, payload.model_dump(exclude_unset=True))


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(todo_id: str, store: TodoStore = Depends(get_todo_store)) -> None:
    logger.debug("DELETE /todos/%s", todo_id)
    store.remove(todo_id)
