from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] interval bounding the visible grid."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValidationError("Date range end must not precede its start")

    def __contains__(self, value: date) -> bool:
        return self.start <= value <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1
