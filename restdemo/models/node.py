"""Node resources modelled as a tagged variant.

A node carries a ``kind`` discriminator and a ``payload`` whose shape depends on
that kind. Each kind registers its payload schema in `NODE_PAYLOADS`; the node
model validates the payload against it before the node ever reaches a store.
Nodes may link to each other through ``next_id``/``prev_id`` to form chains
that `restdemo.nodes.runtime` can execute.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Type

import pydantic
from pydantic import BaseModel, Field, field_validator, model_validator

from restdemo.utils.validators import Identifier, require_non_empty

from .base import ResourceModel


class BasicPayload(BaseModel):
    content: Any = None


class LogPayload(BaseModel):
    message: str
    level: Literal["debug", "info", "warning", "error"] = "info"

    @field_validator("message")
    def _message_not_blank(cls, value: str) -> str:
        return require_non_empty(value)


class StatusPayload(BaseModel):
    status: str = "running"


NODE_PAYLOADS: Dict[str, Type[BaseModel]] = {
    "basic": BasicPayload,
    "log": LogPayload,
    "status": StatusPayload,
}


class Node(ResourceModel):
    id: Identifier
    kind: str = "basic"
    payload: Dict[str, Any] = Field(default_factory=dict)
    next_id: Optional[Identifier] = None
    prev_id: Optional[Identifier] = None

    @model_validator(mode="after")
    def _validate_payload(self) -> "Node":
        schema = NODE_PAYLOADS.get(self.kind)
        if schema is None:
            raise ValueError(f"Unknown node kind '{self.kind}'; expected one of {sorted(NODE_PAYLOADS)}")
        try:
            normalized = schema.model_validate(self.payload)
        except pydantic.ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise ValueError(f"Invalid '{self.kind}' payload at '{location}': {first['msg']}") from exc
        # Store the normalized form so defaults are visible to clients.
        self.payload = normalized.model_dump(mode="json")
        return self

    def merge(self, changes: Dict[str, Any]) -> "Node":
        changes = {key: value for key, value in changes.items() if key != "id"}
        return super().merge(changes)
