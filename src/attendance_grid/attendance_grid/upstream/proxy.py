from __future__ import annotations

import logging
from typing import Any

from ..core.exceptions import UpstreamError
from .connection import UpstreamClient

logger = logging.getLogger(__name__)

ATTENDANCE_WRITE_PATH = "/attendance"


class AttendanceProxy:
    """Relays attendance writes to the upstream service without transforming them."""

    def __init__(self, client: UpstreamClient):
        self._client = client

    def forward(self, body: Any) -> Any:
        """PUT ``body`` verbatim upstream and return the relayed JSON payload.

        A non-JSON upstream answer is wrapped as ``{"message": <text>}``.
        """
        response = self._client.put_json(ATTENDANCE_WRITE_PATH, body)

        content_type = response.headers.get("content-type") or ""
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                raise UpstreamError("Upstream declared JSON but sent an invalid body") from e
        return {"message": response.text}
