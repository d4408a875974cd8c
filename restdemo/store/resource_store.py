"""Thread-safe in-memory resource storage.

One `ResourceStore` exists per resource kind. Every public operation holds the
store's lock for its whole duration, so compound steps such as the existence
check inside `insert` or the read-modify-write inside `merge` are atomic with
respect to other operations on the same store. Nothing is shared between
stores and nothing survives the process.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from restdemo.core.exceptions import ConflictError, NotFoundError
from restdemo.models.base import ResourceModel
from restdemo.utils.monitoring import observe_store_operation

logger = logging.getLogger("restdemo.store")

T = TypeVar("T", bound=ResourceModel)


class ResourceStore(Generic[T]):
    """Identifier-keyed mapping of resources guarded by a re-entrant lock."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._items: Dict[str, T] = {}
        self._lock = threading.RLock()

    def get(self, resource_id: str) -> T:
        with self._lock:
            item = self._items.get(resource_id)
        if item is None:
            self._record("get", "not_found")
            raise NotFoundError(f"{self.name} item '{resource_id}' not found")
        self._record("get", "ok")
        return item

    def list(self) -> List[T]:
        with self._lock:
            items = list(self._items.values())
        self._record("list", "ok")
        return items

    def insert(self, resource_id: str, value: T) -> T:
        """Add a new resource; an existing identifier is a conflict."""

        with self._lock:
            existing = self._items.get(resource_id)
            if existing is None:
                self._items[resource_id] = value
        if existing is not None:
            self._record("insert", "conflict")
            raise ConflictError(
                f"{self.name} item '{resource_id}' already exists",
                details={"resource": existing.model_dump(mode="json")},
            )
        self._record("insert", "created")
        return value

    def replace(self, resource_id: str, value: T) -> Tuple[T, bool]:
        """Create or overwrite; returns the stored value and whether it was created."""

        return self.upsert(resource_id, lambda _existing: value)

    def upsert(self, resource_id: str, build: Callable[[Optional[T]], T]) -> Tuple[T, bool]:
        with self._lock:
            existing = self._items.get(resource_id)
            value = build(existing)
            self._items[resource_id] = value
        created = existing is None
        self._record("replace", "created" if created else "replaced")
        return value, created

    def merge(self, resource_id: str, partial: Dict[str, Any]) -> T:
        with self._lock:
            existing = self._items.get(resource_id)
            if existing is not None:
                merged = existing.merge(partial)
                self._items[resource_id] = merged
        if existing is None:
            self._record("merge", "not_found")
            raise NotFoundError(f"{self.name} item '{resource_id}' not found")
        self._record("merge", "merged")
        return merged

    def remove(self, resource_id: str) -> T:
        with self._lock:
            removed = self._items.pop(resource_id, None)
        if removed is None:
            self._record("remove", "not_found")
            raise NotFoundError(f"{self.name} item '{resource_id}' not found")
        self._record("remove", "removed")
        return removed

    def clear(self) -> int:
        with self._lock:
            count = len(self._items)
            self._items.clear()
        logger.debug("Cleared %d item(s) from %s store", count, self.name)
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, resource_id: object) -> bool:
        with self._lock:
            return resource_id in self._items

    def _record(self, operation: str, outcome: str) -> None:
        logger.debug("%s.%s -> %s", self.name, operation, outcome)
        observe_store_operation(self.name, operation, outcome)
