from __future__ import annotations

from typing import Any

from restdemo.utils.validators import Identifier

from .base import ResourceModel


class KeyValue(ResourceModel):
    key: Identifier
    value: Any = None
