from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee shown as one grid row.

    Note: plain data object, no data-source access here.
    """

    employee_id: int
    name: str
    remaining_leave_days: float
    penalty: float = 0


@dataclass(frozen=True)
class LeaveControl:
    """One leave-day button next to an employee's balance."""

    delta: float
    enabled: bool

    @property
    def label(self) -> str:
        sign = "+" if self.delta > 0 else "-"
        magnitude = abs(self.delta)
        return f"{sign}{magnitude:g}"
