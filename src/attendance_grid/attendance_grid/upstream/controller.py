from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import MethodNotAllowed

from ..container import Container

FAILED_MESSAGE = "Failed to update attendance"
PROXY_PATH = "/api/attendance"
PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def register(app: Flask, container: Container) -> None:
    def _method_not_allowed(method: str):
        response = app.response_class(f"Method {method} Not Allowed", status=405, mimetype="text/plain")
        response.headers["Allow"] = "PUT"
        return response

    @app.route(PROXY_PATH, methods=PROXY_METHODS, endpoint="attendance_proxy")
    def attendance_proxy():
        """Forward an attendance update verbatim to upstream ``PUT /attendance``."""
        if request.method != "PUT":
            return _method_not_allowed(request.method)

        body = request.get_json(silent=True)
        if body is None:
            return jsonify({"message": FAILED_MESSAGE, "error": "Request body must be JSON"}), 500

        try:
            data = container.proxy.forward(body)
        except Exception as e:
            app.logger.error("Error updating attendance: %s", e)
            return jsonify({"message": FAILED_MESSAGE, "error": str(e)}), 500
        return jsonify(data), 200

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(e):
        # Verbs missing from PROXY_METHODS never reach the view.
        if request.path == PROXY_PATH:
            return _method_not_allowed(request.method)
        return e
