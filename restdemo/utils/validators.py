"""Input validation helpers."""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import AfterValidator

IDENTIFIER_PATTERN = re.compile(r"^[^/\s]+$")


def require_non_empty(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("Value must not be empty")
    return value.strip()


def require_identifier(value: str) -> str:
    if not IDENTIFIER_PATTERN.match(value):
        raise ValueError("Identifier must be non-empty and contain no whitespace or '/'")
    return value


Identifier = Annotated[str, AfterValidator(require_identifier)]
