"""Example: use the service layer directly (no Flask).

Controllers are thin; the board logic lives in the services.
"""

import importlib

from config import get_settings_module

from src.attendance_grid.attendance_grid.board.state import BoardState
from src.attendance_grid.attendance_grid.container import build_container
from src.attendance_grid.attendance_grid.core.enums import ViewMode


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=vars(settings))
    grid = container.board_service.load(BoardState(), ViewMode.WEEK)
    print(grid.column_labels)
    for row in grid.rows:
        print(row.employee.name, [f"{c.label} {c.suffix}".strip() for c in row.cells])


if __name__ == "__main__":
    main()
