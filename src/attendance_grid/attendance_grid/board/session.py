from __future__ import annotations

import uuid

from flask import session

from .state import BoardState, BoardStateStore


def operator_state(store: BoardStateStore) -> BoardState:
    """Board state of the operator behind the current Flask session."""
    operator_id = session.get("operator_id")
    if not operator_id:
        operator_id = uuid.uuid4().hex
        session["operator_id"] = operator_id
    return store.get(operator_id)
