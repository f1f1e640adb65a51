"""
Document Base

Base class and coercion helpers for realtime database documents.

Documents are schema-less and written by several clients, so fields are
coerced to their documented defaults instead of failing validation.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class Document(BaseModel):
    """
    Base class for all realtime database documents.

    Fields use snake_case in Python and camelCase aliases on the wire.
    Unknown keys are ignored.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )


def as_number(value: Any, default: float = 0.0) -> float:
    """Coerce a raw value to a finite float, or return ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def as_count(value: Any) -> int:
    """Coerce a raw value to a non-negative integer."""
    return max(0, int(as_number(value)))


def as_text(value: Any) -> Optional[str]:
    """Coerce a raw value to a stripped string, or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
