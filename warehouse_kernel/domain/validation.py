"""
Lightweight domain validation helpers.

Pure checks with no I/O. Used at the command boundary so that every
malformed input fails with ``ValidationError`` before any mutation.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from warehouse_kernel.exceptions import ValidationError


def require_text(value: Any, name: str) -> str:
    """Return ``value`` stripped; raise ValidationError if missing or blank."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(name, "is required")
    return value.strip()


def optional_text(value: Any, name: str) -> str | None:
    """Return ``value`` stripped, or None for missing / blank input."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(name, f"must be text, not {type(value).__name__}")
    return value.strip() or None


def require_int(value: Any, name: str, minimum: int = 0) -> int:
    """Return ``value`` if it is an int >= ``minimum`` (bool is rejected)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(name, f"must be an integer, not {value!r}")
    if value < minimum:
        raise ValidationError(name, f"must be at least {minimum}, got {value}")
    return value


def require_date(value: Any, name: str) -> date:
    """Return ``value`` as a plain ``date`` (datetimes are truncated)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(name, f"must be a date, not {value!r}")
