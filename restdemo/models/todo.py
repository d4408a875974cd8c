"""TODO item model."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import Field, field_validator

from restdemo.utils.validators import Identifier, require_non_empty

from .base import ResourceModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Todo(ResourceModel):
    id: Identifier
    text: str
    completed: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("text")
    def _text_not_blank(cls, value: str) -> str:
        return require_non_empty(value)

    def merge(self, changes: Dict[str, Any]) -> "Todo":
        # Timestamps are server-managed; callers cannot rewrite them.
        changes = {key: value for key, value in changes.items() if key not in {"id", "created_at", "updated_at"}}
        changes["updated_at"] = utcnow()
        return super().merge(changes)
