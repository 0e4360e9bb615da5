from __future__ import annotations

import threading
from dataclasses import replace
from typing import Sequence

from ..core.exceptions import ValidationError
from .model import Employee

DEMO_EMPLOYEES = (
    Employee(employee_id=1, name="John Doe", remaining_leave_days=3, penalty=50000),
    Employee(employee_id=2, name="Jane Smith", remaining_leave_days=5, penalty=30000),
    Employee(employee_id=3, name="Bob Johnson", remaining_leave_days=1, penalty=75000),
)


class SyntheticEmployeeRepository:
    """In-memory employee list for local prototyping (lives as long as the process)."""

    penalty_unit = "KRW"

    def __init__(self, employees: Sequence[Employee] = DEMO_EMPLOYEES):
        self._lock = threading.Lock()
        self._by_id = {e.employee_id: e for e in employees}

    def list_all(self) -> Sequence[Employee]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda e: e.employee_id)

    def adjust_leave_days(self, employee_id: int, delta: float) -> None:
        with self._lock:
            employee = self._by_id.get(employee_id)
            if not employee:
                raise ValidationError("Employee does not exist")
            balance = max(0.0, employee.remaining_leave_days + delta)
            self._by_id[employee_id] = replace(employee, remaining_leave_days=balance)
