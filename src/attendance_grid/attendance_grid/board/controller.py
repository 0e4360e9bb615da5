from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import format_iso_date, long_label, parse_iso_date
from ..common.validators import require_int
from ..container import Container
from ..core.enums import EDITABLE_STATUSES, ViewMode
from ..core.exceptions import InvalidTransition, UpstreamError, ValidationError
from .session import operator_state


def register(app: Flask, container: Container) -> None:
    def _view_mode_arg():
        value = request.args.get("view")
        if not value:
            return None
        return ViewMode.parse(value)

    def _render_board(state, grid, edit=None):
        return render_template(
            "board.html",
            grid=grid,
            state=state,
            edit=edit,
            view_modes=list(ViewMode),
            editable_statuses=EDITABLE_STATUSES,
            long_label=long_label,
            active_page="board",
        )

    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("board"))

    @app.route("/board", methods=["GET"], endpoint="board")
    def board():
        state = operator_state(container.states)
        try:
            view_mode = _view_mode_arg()
        except ValidationError as e:
            flash(str(e), "warning")
            view_mode = None

        grid = state.grid
        try:
            grid = container.board_service.load(state, view_mode)
        except InvalidTransition as e:
            flash(str(e), "warning")
        except Exception:
            # Keep showing the previous table if the reload fails.
            app.logger.exception("Error loading the attendance board")
            flash("System error while loading attendance", "danger")
        return _render_board(state, grid)

    @app.route("/attendance/edit", methods=["GET"], endpoint="edit_attendance")
    def edit_attendance():
        state = operator_state(container.states)
        try:
            employee_id = require_int(request.args.get("employee_id"), "employee_id")
            day = parse_iso_date(request.args.get("date", ""))
            grid = container.board_service.load(state)
            edit = container.board_service.open_edit(state, grid, employee_id, day)
        except (ValidationError, InvalidTransition) as e:
            flash(str(e), "warning")
            return redirect(url_for("board"))
        return _render_board(state, grid, edit)

    @app.route("/attendance/edit", methods=["POST"], endpoint="save_attendance")
    def save_attendance():
        state = operator_state(container.states)
        try:
            container.board_service.commit_edit(
                state,
                status=request.form.get("status", ""),
                time=request.form.get("time", ""),
                comment=request.form.get("comment", ""),
            )
            flash("Attendance updated", "success")
        except ValidationError as e:
            flash(str(e), "warning")
            if state.edit is not None:
                return redirect(
                    url_for(
                        "edit_attendance",
                        employee_id=state.edit.employee_id,
                        date=format_iso_date(state.edit.attendance_date),
                    )
                )
        except InvalidTransition as e:
            flash(str(e), "warning")
        except UpstreamError as e:
            flash(f"Failed to update attendance: {e}", "danger")
        except Exception:
            app.logger.exception("Error saving attendance")
            flash("System error while saving attendance", "danger")
        # The board page reloads the whole table for the current range.
        return redirect(url_for("board"))

    @app.route("/attendance/edit/cancel", methods=["POST"], endpoint="cancel_attendance_edit")
    def cancel_attendance_edit():
        operator_state(container.states).cancel_edit()
        return redirect(url_for("board"))

    @app.route("/api/board", methods=["GET"], endpoint="api_board")
    def api_board():
        state = operator_state(container.states)
        try:
            grid = container.board_service.load(state, _view_mode_arg())
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except InvalidTransition as e:
            return jsonify({"success": False, "message": str(e)}), 409
        except Exception:
            app.logger.exception("Error loading the attendance board")
            return jsonify({"success": False, "message": "System error while loading attendance"}), 500
        return jsonify({"success": True, "board": grid.to_dict()})
