from __future__ import annotations

from datetime import datetime

from ..core.constants import TIME_FORMAT
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_time(value: str | None, field_name: str = "Check-in time") -> str:
    """Normalize an optional ``HH:MM`` value; empty input stays empty."""
    v = (value or "").strip()
    if not v:
        return ""
    try:
        return datetime.strptime(v, TIME_FORMAT).strftime(TIME_FORMAT)
    except ValueError:
        raise ValidationError(f"{field_name} must be HH:MM (24h)")


def require_int(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
