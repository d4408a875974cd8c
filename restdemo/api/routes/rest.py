"""Generic key-value endpoints.

- `GET /rest`: list every stored pair
- `POST /rest`, `POST /rest/{key}`: create a pair (409 when the key exists)
- `PUT /rest`, `PUT /rest/{key}`: create or overwrite a pair
- `PATCH /rest/{key}`: update the value of an existing pair
- `DELETE /rest/{key}`: remove a pair
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from restdemo.api.dependencies import get_kv_store
from restdemo.core.exceptions import ForbiddenError
from restdemo.models import KeyValue
from restdemo.store.resource_store import ResourceStore

logger = logging.getLogger("restdemo.api.rest")

router = APIRouter(prefix="/rest", tags=["rest"])

KVStore = ResourceStore[KeyValue]


class KeyValueCreateRequest(BaseModel):
    key: Optional[str] = None
    value: Any = None


class KeyValueWriteRequest(BaseModel):
    value: Any = None


@router.get("", response_model=List[KeyValue])
async def list_pairs(store: KVStore = Depends(get_kv_store)) -> List[KeyValue]:
    return store.list()


@router.post("", response_model=KeyValue, status_code=status.HTTP_201_CREATED)
async def create_pair(payload: KeyValueCreateRequest, store: KVStore = Depends(get_kv_store)) -> KeyValue:
    """Create a pair under the supplied key, or a generated one when omitted."""

    key = payload.key or str(uuid.uuid4())
    logger.debug("POST /rest key=%s", key)
    return store.insert(key, KeyValue.build({"key": key, "value": payload.value}))


@router.put("", response_model=KeyValue, status_code=status.HTTP_201_CREATED)
async def put_generated_pair(payload: KeyValueWriteRequest, store: KVStore = Depends(get_kv_store)) -> KeyValue:
    key = str(uuid.uuid4())
    logger.debug("PUT /rest generated key=%s", key)
    value, _ = store.replace(key, KeyValue.build({"key": key, "value": payload.value}))
    return value


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_pairs() -> None:
    logger.warning("DELETE /rest refused: clearing a collection is not allowed")
    raise ForbiddenError("Clearing the rest collection is not allowed")


@router.get("/{key}", response_model=KeyValue)
async def get_pair(key: str, store: KVStore = Depends(get_kv_store)) -> KeyValue:
    logger.debug("GET /rest/%s", key)
    return store.get(key)


@router.post("/{key}", response_model=KeyValue, status_code=status.HTTP_201_CREATED)
async def create_pair_at(key: str, payload: KeyValueWriteRequest, store: KVStore = Depends(get_kv_store)) -> KeyValue:
    logger.debug("POST /rest/%s", key)
    return store.insert(key, KeyValue.build({"key": key, "value": payload.value}))


@router.put("/{key}", response_model=KeyValue)
async def replace_pair(
    key: str,
    payload: KeyValueWriteRequest,
    response: Response,
    store: KVStore = Depends(get_kv_store),
) -> KeyValue:
    """Idempotent create-or-overwrite; 201 when the key was new, 200 otherwise."""

    logger.debug("PUT /rest/%s", key)
    value, created = store.replace(key, KeyValue.build({"key": key, "value": payload.value}))
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return value


@router.patch("/{key}", response_model=KeyValue)
async def update_pair(key: str, payload: KeyValueWriteRequest, store: KVStore = Depends(get_kv_store)) -> KeyValue:
    logger.debug("PATCH /rest/%s", key)
    return store.merge(key, payload.model_dump(exclude_unset=True))


@router.delete("/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pair(key: str, store: KVStore = Depends(get_kv_store)) -> None:
    logger.debug("DELETE /rest/%s", key)
    store.remove(key)
