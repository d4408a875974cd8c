"""Per-application collection of resource stores."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from restdemo.models import KeyValue, Node, Todo
from restdemo.store.resource_store import ResourceStore

logger = logging.getLogger("restdemo.store")


@dataclass
class StoreRegistry:
    """One empty store per resource kind, created together with the app."""

    kv: ResourceStore[KeyValue] = field(default_factory=lambda: ResourceStore("rest"))
    todos: ResourceStore[Todo] = field(default_factory=lambda: ResourceStore("todos"))
    nodes: ResourceStore[Node] = field(default_factory=lambda: ResourceStore("node"))

    def close(self) -> None:
        """Discard every stored resource."""

        total = sum(store.clear() for store in (self.kv, self.todos, self.nodes))
        logger.info("Discarded %d in-memory resource(s)", total)
