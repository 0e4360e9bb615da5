from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Mapping, Optional, Union

from .attendance.remote_repository import RemoteAttendanceRepository
from .attendance.synthetic_repository import SyntheticAttendanceRepository
from .board.service import BoardService
from .board.state import BoardStateStore
from .common.datetime_utils import today_local
from .core.constants import DEFAULT_FETCH_WORKERS, DEFAULT_HTTP_TIMEOUT, DEFAULT_VIEW_MODE, DEFAULT_WEEK_STARTS_ON
from .core.enums import ViewMode
from .employees.remote_repository import RemoteEmployeeRepository
from .employees.service import LeaveBalanceService
from .employees.synthetic_repository import SyntheticEmployeeRepository
from .upstream.connection import UpstreamClient, UpstreamConfig
from .upstream.proxy import AttendanceProxy

DATA_SOURCES = {"synthetic", "remote"}


@dataclass(frozen=True)
class Container:
    data_source: str

    client: UpstreamClient
    proxy: AttendanceProxy

    employees_repo: Union[SyntheticEmployeeRepository, RemoteEmployeeRepository]
    attendance_repo: Union[SyntheticAttendanceRepository, RemoteAttendanceRepository]

    leave_service: LeaveBalanceService
    board_service: BoardService
    states: BoardStateStore


def build_container(
    *,
    settings: Mapping[str, Any],
    clock: Callable[[], date] = today_local,
    session: Optional[Any] = None,
) -> Container:
    """Wire repositories and services for the configured data source.

    ``session`` replaces the ``requests.Session`` used for upstream calls (tests pass a fake).
    """
    data_source = str(settings.get("DATA_SOURCE", "synthetic")).lower()
    if data_source not in DATA_SOURCES:
        raise ValueError(f"DATA_SOURCE must be one of {sorted(DATA_SOURCES)}, got {data_source!r}")

    base_url = str(settings.get("API_BASE_URL") or "")
    if data_source == "remote" and not base_url:
        raise ValueError("API_BASE_URL must be set when DATA_SOURCE=remote")

    # The proxy endpoint is served in both modes, so the client always exists.
    client = UpstreamClient(
        UpstreamConfig(base_url=base_url, timeout=float(settings.get("HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT))),
        session=session,
    )
    proxy = AttendanceProxy(client)

    if data_source == "remote":
        employees_repo = RemoteEmployeeRepository(client)
        attendance_repo = RemoteAttendanceRepository(
            client,
            proxy,
            max_workers=int(settings.get("FETCH_WORKERS", DEFAULT_FETCH_WORKERS)),
        )
    else:
        employees_repo = SyntheticEmployeeRepository()
        attendance_repo = SyntheticAttendanceRepository(clock=clock)

    leave_service = LeaveBalanceService(employees_repo)
    board_service = BoardService(
        employees_repo,
        attendance_repo,
        leave_service=leave_service,
        clock=clock,
        week_starts_on=int(settings.get("WEEK_STARTS_ON", DEFAULT_WEEK_STARTS_ON)),
    )
    states = BoardStateStore(default_view_mode=ViewMode.parse(str(settings.get("DEFAULT_VIEW_MODE", DEFAULT_VIEW_MODE))))

    return Container(
        data_source=data_source,
        client=client,
        proxy=proxy,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leave_service=leave_service,
        board_service=board_service,
        states=states,
    )
