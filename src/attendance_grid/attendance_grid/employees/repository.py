from __future__ import annotations

from typing import Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    penalty_unit: str

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def adjust_leave_days(self, employee_id: int, delta: float) -> None:
        """Apply a leave-day delta; validation of the delta happens in the service."""

        raise NotImplementedError
