from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Sequence

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.constants import DEFAULT_FETCH_WORKERS
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, UpstreamError
from ..period.model import DateRange
from ..upstream.connection import UpstreamClient
from ..upstream.proxy import AttendanceProxy
from .model import AttendanceRecord, EditSession, RecordBatch

logger = logging.getLogger(__name__)

RECORDS_PATH = "/attendance/records"


class RemoteAttendanceRepository:
    """Records served by the upstream API; writes go through the attendance proxy.

    Note: this backend does not know "today". Future dates are NOT_YET only because
    upstream has no record for them.
    """

    not_yet_editable = True

    def __init__(
        self,
        client: UpstreamClient,
        proxy: AttendanceProxy,
        *,
        max_workers: int = DEFAULT_FETCH_WORKERS,
    ):
        self._client = client
        self._proxy = proxy
        self._max_workers = max(1, int(max_workers))

    def records_for(self, employee_id: int, date_range: DateRange) -> Sequence[AttendanceRecord]:
        rows = self._client.get_json(
            RECORDS_PATH,
            params={
                "userId": employee_id,
                "startDate": format_iso_date(date_range.start),
                "endDate": format_iso_date(date_range.end),
            },
        )
        if not isinstance(rows, list):
            raise UpstreamError("Attendance records must be a JSON array")
        out: list[AttendanceRecord] = []
        for row in rows:
            if not isinstance(row, dict):
                raise UpstreamError("Attendance record must be a JSON object")
            try:
                out.append(self._to_record(employee_id, row))
            except (KeyError, TypeError, DomainError) as e:
                # An unreadable row never matches a column; the cell stays NOT_YET.
                logger.warning("Skipping attendance row %r of employee %s: %s", row, employee_id, e)
        return out

    def records_for_many(self, employee_ids: Iterable[int], date_range: DateRange) -> RecordBatch:
        """One lookup per employee, all in flight at once; waits until every lookup settles."""
        ids = list(employee_ids)
        if not ids:
            return RecordBatch()

        records: dict[int, list[AttendanceRecord]] = {}
        failed: set[int] = set()
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(ids))) as pool:
            futures = {eid: pool.submit(self.records_for, eid, date_range) for eid in ids}
            for eid, future in futures.items():
                try:
                    records[eid] = list(future.result())
                except UpstreamError as e:
                    logger.error("Error fetching attendance data for employee %s: %s", eid, e)
                    failed.add(eid)
        return RecordBatch(records=records, failed=frozenset(failed))

    def save(self, edit: EditSession) -> None:
        payload = edit.to_payload()
        logger.info("Submitting attendance update: %s", payload)
        response = self._proxy.forward(payload)
        logger.debug("Server response: %s", response)

    @staticmethod
    def _to_record(employee_id: int, row: dict) -> AttendanceRecord:
        return AttendanceRecord(
            employee_id=employee_id,
            attendance_date=parse_iso_date(row["attendanceDate"]),
            status=AttendanceStatus.parse(row["status"]),
            time=row.get("time") or None,
            comment=row.get("comment") or None,
        )
