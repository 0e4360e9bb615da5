from __future__ import annotations

import importlib
import logging
from datetime import date
from typing import Any, Callable, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .board.controller import register as register_board
from .common.datetime_utils import today_local
from .container import build_container
from .employees.controller import register as register_employees
from .upstream.controller import register as register_upstream

LOG_FORMAT = "[attendance-grid] %(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(app: Flask) -> None:
    level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    app.logger.setLevel(level)


def create_app(
    *,
    overrides: Optional[Mapping[str, Any]] = None,
    clock: Callable[[], date] = today_local,
    session: Optional[Any] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config.from_object(settings)
    if overrides:
        app.config.update(overrides)
    app.secret_key = app.config["SECRET_KEY"]

    _configure_logging(app)
    if app.config.get("DEBUG"):
        app.logger.info(
            "settings=%s data_source=%s api=%s",
            settings_module,
            app.config.get("DATA_SOURCE"),
            app.config.get("API_BASE_URL") or "-",
        )

    container = build_container(settings=app.config, clock=clock, session=session)
    app.extensions["attendance_grid"] = container

    register_board(app, container)
    register_employees(app, container)
    register_upstream(app, container)

    return app
