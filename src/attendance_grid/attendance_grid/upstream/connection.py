from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_HTTP_TIMEOUT
from ..core.exceptions import UpstreamError


@dataclass
class UpstreamConfig:
    base_url: str
    timeout: float = DEFAULT_HTTP_TIMEOUT


class UpstreamClient:
    """Thin JSON client for the backing attendance API.

    Note: every transport failure or non-2xx answer becomes ``UpstreamError`` so
    callers only handle one exception type.

    Each thread gets its own ``requests.Session`` unless one is passed in.
    """

    def __init__(self, config: UpstreamConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._shared_session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, *, params: Optional[dict] = None, json_body: Any = None):
        url = self.url(path)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_body,
                timeout=self._config.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"{method} {url} failed: {e}") from e

        if not response.ok:
            raise UpstreamError(f"HTTP error! status: {response.status_code}")
        return response

    def get_json(self, path: str, *, params: Optional[dict] = None) -> Any:
        response = self.request("GET", path, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"GET {path} returned invalid JSON") from e

    def put_json(self, path: str, body: Any):
        return self.request("PUT", path, json_body=body)
