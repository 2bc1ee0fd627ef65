"""Flask helpers shared by the JSON controllers: session guards, request
parsing and the DomainError -> HTTP status mapping."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import Flask, current_app, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Locale, Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def error_response(message: str, status: int, **extra: Any):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please log in to continue.", 401)
        return view(*args, **kwargs)

    return wrapper


def _role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response("Please log in to continue.", 401)
            if session.get("role") != role.value:
                return error_response("You are not allowed to access this resource.", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = _role_required(Role.ADMIN)
employee_required = _role_required(Role.EMPLOYEE)


def current_user_id() -> str:
    return str(session["user_id"])


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_locale(body: dict[str, Any] | None = None) -> Locale:
    """`locale` from the JSON body or query string, else the configured default."""
    default = Locale.parse(current_app.config.get("DEFAULT_LOCALE"))
    raw = (body or {}).get("locale") or request.args.get("locale")
    return Locale.parse(raw, default)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return error_response(str(e), status)
        return error_response(str(e), 400)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return error_response(f"Internal error: {e}", 500)
        return error_response("Internal error", 500)
