from __future__ import annotations

from typing import Optional

from flask import current_app, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)


def status_for(error: DomainError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, NotFoundError):
        return 404
    return 400


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_failure(error: DomainError):
    return fail(str(error), status_for(error))


def server_failure(message: str, error: Optional[Exception] = None):
    """500 with a generic message; the error text is only exposed in DEBUG."""
    current_app.logger.exception(message)
    body = {"success": False, "message": message}
    if error is not None and current_app.config.get("DEBUG", False):
        body["error"] = str(error)
    return jsonify(body), 500


def read_json_object() -> dict:
    """Request body as a dict; an absent body reads as ``{}``."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
