"""Shared behaviour for stored resource models."""

from __future__ import annotations

from typing import Any, Dict, TypeVar

import pydantic
from pydantic import BaseModel

from restdemo.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound="ResourceModel")


class ResourceModel(BaseModel):
    """Base class for every value held in a `ResourceStore`."""

    def merge(self: ModelT, changes: Dict[str, Any]) -> ModelT:
        """Return a re-validated copy with ``changes`` laid over the current fields.

        Fields absent from ``changes`` keep their current value.
        """

        merged = self.model_dump(mode="python")
        merged.update(changes)
        return self.__class__.build(merged)

    @classmethod
    def build(cls: type[ModelT], data: Dict[str, Any]) -> ModelT:
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ValidationError(
                f"Invalid {cls.__name__} payload",
                details={"errors": exc.errors(include_url=False, include_context=False, include_input=False)},
            ) from exc
