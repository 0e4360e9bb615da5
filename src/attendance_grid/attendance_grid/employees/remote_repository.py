from __future__ import annotations

import logging
from typing import Sequence

from ..core.exceptions import UpstreamError
from ..upstream.connection import UpstreamClient
from .model import Employee

logger = logging.getLogger(__name__)


class RemoteEmployeeRepository:
    """Employees served by the upstream API (``GET /users``)."""

    penalty_unit = "points"

    def __init__(self, client: UpstreamClient):
        self._client = client

    def list_all(self) -> Sequence[Employee]:
        rows = self._client.get_json("/users")
        if not isinstance(rows, list):
            raise UpstreamError("Employee list must be a JSON array")
        try:
            return [self._to_employee(r) for r in rows]
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f"Malformed employee payload: {e}") from e

    def adjust_leave_days(self, employee_id: int, delta: float) -> None:
        # The upstream service owns the floor/validation of the balance.
        self._client.put_json(f"/attendance/{int(employee_id)}/vacation-days", {"change": delta})
        logger.info("Leave days of employee %s changed by %s", employee_id, delta)

    @staticmethod
    def _to_employee(row: dict) -> Employee:
        return Employee(
            employee_id=int(row["id"]),
            name=str(row["name"]),
            remaining_leave_days=float(row.get("remainingLeaveDays") or 0),
            penalty=float(row.get("latePenaltyPoints") or 0),
        )
