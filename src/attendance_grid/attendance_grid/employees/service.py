from __future__ import annotations

from typing import Sequence

from ..core.constants import LEAVE_DAY_DELTAS
from ..core.exceptions import ValidationError
from .model import Employee, LeaveControl
from .repository import EmployeeRepository


class LeaveBalanceService:
    def __init__(self, employees: EmployeeRepository, *, deltas: Sequence[float] = LEAVE_DAY_DELTAS):
        self._employees = employees
        self._deltas = tuple(float(d) for d in deltas)

    @staticmethod
    def is_allowed(balance: float, delta: float) -> bool:
        """A withdrawal is allowed only while the balance covers it."""
        return delta >= 0 or balance >= abs(delta)

    def controls_for(self, employee: Employee) -> list[LeaveControl]:
        return [LeaveControl(delta=d, enabled=self.is_allowed(employee.remaining_leave_days, d)) for d in self._deltas]

    def adjust(self, employee: Employee, delta: float) -> None:
        """Apply one of the fixed deltas to the balance shown for ``employee``.

        The check runs against the displayed balance, before anything is submitted.
        """
        delta = float(delta)
        if delta not in self._deltas:
            raise ValidationError(f"Leave-day change must be one of {', '.join(f'{d:+g}' for d in self._deltas)}")
        if not self.is_allowed(employee.remaining_leave_days, delta):
            raise ValidationError(f"{employee.name} has only {employee.remaining_leave_days:.1f} leave days left")
        self._employees.adjust_leave_days(employee.employee_id, delta)
