from __future__ import annotations

from datetime import date, datetime

from ..core.constants import ISO_DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")
    try:
        return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def column_label(value: date) -> str:
    """Short header label, e.g. ``Wed, Mar 6``."""
    return f"{value:%a, %b} {value.day}"


def long_label(value: date) -> str:
    """Label used in the edit form, e.g. ``Wednesday, March 6, 2024``."""
    return f"{value:%A, %B} {value.day}, {value.year}"


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()
