from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Optional

from ..attendance.model import EditSession
from ..core.constants import DEFAULT_VIEW_MODE
from ..core.enums import BoardPhase, ViewMode
from ..core.exceptions import InvalidTransition
from ..period.model import DateRange
from .model import AttendanceGrid


class BoardState:
    """Consolidated view state of one operator's board.

    Phases: IDLE -> LOADING -> LOADED -> EDITING -> SAVING -> LOADED | ERROR.
    Every load takes a generation ticket; only the newest ticket may publish its grid.
    """

    def __init__(self, view_mode: ViewMode = ViewMode(DEFAULT_VIEW_MODE)):
        self._lock = threading.RLock()
        self.phase = BoardPhase.IDLE
        self.view_mode = view_mode
        self.date_range: Optional[DateRange] = None
        self.grid: Optional[AttendanceGrid] = None
        self.edit: Optional[EditSession] = None
        self.error: Optional[str] = None
        self.generation = 0
        self.visible_penalties: set[int] = set()

    def _require(self, *phases: BoardPhase) -> None:
        if self.phase not in phases:
            raise InvalidTransition(f"Not allowed while the board is {self.phase.value}")

    # ----- loading -----

    def begin_load(self, view_mode: ViewMode, date_range: DateRange) -> int:
        """Select a new range (replacing the previous one) and return the load ticket."""
        with self._lock:
            if self.phase is BoardPhase.SAVING:
                raise InvalidTransition("An attendance update is still being saved")
            self.generation += 1
            self.view_mode = view_mode
            self.date_range = date_range
            self.edit = None
            self.phase = BoardPhase.LOADING
            return self.generation

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self.generation

    def finish_load(self, ticket: int, grid: AttendanceGrid) -> bool:
        """Publish ``grid``; returns False (and changes nothing) for an outdated ticket."""
        with self._lock:
            if ticket != self.generation:
                return False
            self.grid = grid
            self.error = None
            self.phase = BoardPhase.LOADED
            return True

    def fail_load(self, ticket: int, message: str) -> bool:
        with self._lock:
            if ticket != self.generation:
                return False
            self.error = message
            self.phase = BoardPhase.ERROR
            return True

    # ----- editing -----

    def open_edit(self, edit: EditSession) -> None:
        with self._lock:
            self._require(BoardPhase.LOADED, BoardPhase.ERROR)
            self.edit = edit
            self.error = None
            self.phase = BoardPhase.EDITING

    def update_edit(self, edit: EditSession) -> None:
        with self._lock:
            self._require(BoardPhase.EDITING)
            self.edit = edit

    def cancel_edit(self) -> None:
        with self._lock:
            if self.phase is BoardPhase.EDITING:
                self.edit = None
                self.phase = BoardPhase.LOADED

    def begin_save(self) -> EditSession:
        with self._lock:
            self._require(BoardPhase.EDITING)
            if self.edit is None:
                raise InvalidTransition("No attendance edit is open")
            self.phase = BoardPhase.SAVING
            return self.edit

    def finish_save(self) -> None:
        with self._lock:
            self._require(BoardPhase.SAVING)
            self.edit = None
            self.phase = BoardPhase.LOADED

    def fail_save(self, message: str) -> None:
        with self._lock:
            self._require(BoardPhase.SAVING)
            self.edit = None
            self.error = message
            self.phase = BoardPhase.ERROR

    # ----- row display -----

    def toggle_penalty(self, employee_id: int) -> bool:
        with self._lock:
            if employee_id in self.visible_penalties:
                self.visible_penalties.discard(employee_id)
                return False
            self.visible_penalties.add(employee_id)
            return True


class BoardStateStore:
    """Per-operator board states kept in process memory (least recently used evicted first)."""

    def __init__(self, *, default_view_mode: ViewMode = ViewMode(DEFAULT_VIEW_MODE), max_operators: int = 1024):
        self._lock = threading.Lock()
        self._states: "OrderedDict[str, BoardState]" = OrderedDict()
        self._default_view_mode = default_view_mode
        self._max_operators = max_operators

    def get(self, operator_id: str) -> BoardState:
        with self._lock:
            state = self._states.get(operator_id)
            if state is None:
                state = BoardState(self._default_view_mode)
                self._states[operator_id] = state
            self._states.move_to_end(operator_id)
            while len(self._states) > self._max_operators:
                self._states.popitem(last=False)
            return state

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
