"""Identifier generation and display-safe text handling."""

import html
import math
import uuid
from typing import Any


def generate_council_id() -> str:
    """Return a new random council identifier (UUID4 string)."""
    return str(uuid.uuid4())


def sanitize(value: Any) -> Any:
    """Escape HTML-significant characters in a string.

    Non-string values are returned unchanged. Quotes are escaped too, so
    ``'`` becomes ``&#x27;`` and ``"`` becomes ``&quot;``.
    """
    if not isinstance(value, str):
        return value
    return html.escape(value, quote=True)


def is_blank(value: Any) -> bool:
    """True when value is not a string or is empty after trimming."""
    return not isinstance(value, str) or not value.strip()


def format_number(value: int | float) -> str:
    """Render a number without a trailing ``.0`` when it is whole."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)
