from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def ok(payload: Optional[dict] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), status_for(e))

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return fail(e.description or e.name, e.code or 500)
        logger.exception("[web] unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG", False):
            return fail(f"Internal server error: {e}", 500)
        return fail("Internal server error", 500)


def current_code() -> Optional[str]:
    return session.get("code")


def is_admin() -> bool:
    return session.get("role") == Role.ADMIN.value


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "code" not in session:
            return fail("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "code" not in session:
            return fail("Please log in to continue", 401)
        if not is_admin():
            return fail("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data


def date_arg(source: dict, name: str, *, required: bool = True):
    raw = source.get(name)
    if not raw:
        if required:
            raise ValidationError(f"{name} is required")
        return None
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"{name} must be a date in YYYY-MM-DD format")
