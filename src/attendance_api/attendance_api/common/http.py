from __future__ import annotations

from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import parse_optional_date

# Most specific first; the first isinstance match wins.
_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def error_response(code: str, message: str, status: int):
    return jsonify({"error": code, "message": message}), status


def json_body() -> dict:
    """Request JSON object; an empty body counts as ``{}``."""
    if not request.get_data(cache=True):
        return {}
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_date(name: str):
    return parse_optional_date(request.args.get(name), name)


def query_int(name: str) -> Optional[int]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def bearer_token() -> Optional[str]:
    """Token from ``Authorization: Bearer`` or the legacy ``x-auth-token`` header."""
    token = request.headers.get("x-auth-token")
    if token:
        return token.strip()
    auth = request.headers.get("Authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip() or None
    return None


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if status >= 401:
            app.logger.info("%s %s -> %s %s", request.method, request.path, status, e.code)
        return error_response(e.code, str(e), status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        code = (e.name or "error").lower().replace(" ", "_")
        return error_response(code, e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = "Internal server error"
        if app.config.get("DEBUG"):
            message = f"{message}: {e}"
        return error_response("internal_error", message, 500)
