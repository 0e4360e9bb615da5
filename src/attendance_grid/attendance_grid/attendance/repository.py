from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from ..period.model import DateRange
from .model import AttendanceRecord, EditSession, RecordBatch


class AttendanceRepository(Protocol):
    """Capability shared by the data backends: given identity + range, produce records."""

    # Whether a NOT_YET placeholder cell may be opened in the edit form.
    not_yet_editable: bool

    def records_for(self, employee_id: int, date_range: DateRange) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def records_for_many(self, employee_ids: Iterable[int], date_range: DateRange) -> RecordBatch:
        raise NotImplementedError

    def save(self, edit: EditSession) -> None:
        raise NotImplementedError
