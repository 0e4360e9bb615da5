from __future__ import annotations

from flask import Flask, flash, redirect, request, url_for

from ..board.session import operator_state
from ..container import Container
from ..core.exceptions import InvalidTransition, UpstreamError, ValidationError


def register(app: Flask, container: Container) -> None:
    def _parse_delta(value) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValidationError("Leave-day change must be a number")

    @app.route("/employees/<int:employee_id>/leave-days", methods=["POST"], endpoint="adjust_leave_days")
    def adjust_leave_days(employee_id: int):
        state = operator_state(container.states)
        try:
            delta = _parse_delta(request.form.get("delta"))
            container.board_service.adjust_leave(state, employee_id, delta)
        except (ValidationError, InvalidTransition) as e:
            flash(str(e), "warning")
        except UpstreamError as e:
            app.logger.error("Error updating vacation days: %s", e)
            flash("Failed to update vacation days", "danger")
        return redirect(url_for("board"))

    @app.route("/employees/<int:employee_id>/penalty", methods=["POST"], endpoint="toggle_penalty")
    def toggle_penalty(employee_id: int):
        operator_state(container.states).toggle_penalty(employee_id)
        return redirect(url_for("board"))
