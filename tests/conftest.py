from __future__ import annotations

import threading
from datetime import date
from typing import Any, Callable, Optional, Union
from urllib.parse import urlsplit

import pytest

from src.attendance_grid.attendance_grid.main import create_app
from src.attendance_grid.attendance_grid.upstream.connection import UpstreamClient, UpstreamConfig

UPSTREAM = "http://upstream.test"


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = None,
        text: str = "",
        content_type: str = "application/json",
    ):
        self.status_code = status_code
        self._json = json_data
        self.text = text
        self.headers = {"content-type": content_type} if content_type else {}

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


Handler = Union[FakeResponse, Exception, Callable[[dict, Any], FakeResponse]]


class FakeSession:
    """Stands in for ``requests.Session``: routes by (method, path) and records every call."""

    def __init__(self):
        self._lock = threading.Lock()
        self.routes: dict[tuple[str, str], Handler] = {}
        self.calls: list[dict] = []

    def route(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method.upper(), path)] = handler

    def calls_to(self, method: str, path: str) -> list[dict]:
        return [c for c in self.calls if c["method"] == method.upper() and c["path"] == path]

    def request(self, method, url, params=None, json=None, timeout=None, **kwargs):
        path = urlsplit(url).path
        with self._lock:
            self.calls.append({"method": method.upper(), "path": path, "params": params or {}, "json": json})
        handler = self.routes.get((method.upper(), path))
        if handler is None:
            return FakeResponse(404, text="not found", content_type="text/plain")
        if isinstance(handler, Exception):
            raise handler
        if callable(handler):
            return handler(params or {}, json)
        return handler


@pytest.fixture
def fixed_today() -> date:
    # A Wednesday.
    return date(2024, 3, 6)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def upstream_client(fake_session) -> UpstreamClient:
    return UpstreamClient(UpstreamConfig(base_url=UPSTREAM, timeout=5), session=fake_session)


@pytest.fixture
def make_app(monkeypatch, fixed_today, fake_session):
    monkeypatch.setenv("APP_ENV", "testing")

    def _make(data_source: str = "synthetic", *, today: Optional[date] = None, **overrides):
        settings = {"DATA_SOURCE": data_source, "API_BASE_URL": UPSTREAM, **overrides}
        app = create_app(overrides=settings, clock=lambda: today or fixed_today, session=fake_session)
        app.config["TESTING"] = True
        return app

    return _make


@pytest.fixture
def fake_response():
    return FakeResponse
