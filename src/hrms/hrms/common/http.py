"""Shared helpers for the JSON controllers.

Controllers raise domain exceptions; ``register_error_handlers`` turns them
into the ``{"success": false, "message": ...}`` envelope with a status code.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any, Iterable, Optional

from flask import Flask, jsonify, request, session
from flask.json.provider import DefaultJSONProvider
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..core.permissions import require_role

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


class ApiJSONProvider(DefaultJSONProvider):
    """ISO dates, HH:MM times and plain numbers instead of Flask's HTTP-date format."""

    @staticmethod
    def default(o: Any):
        if isinstance(o, datetime):
            return o.isoformat(timespec="seconds")
        if isinstance(o, date):
            return o.isoformat()
        if isinstance(o, time):
            return o.strftime("%H:%M")
        if isinstance(o, Decimal):
            return float(o)
        if isinstance(o, Enum):
            return o.value
        if isinstance(o, (set, frozenset)):
            return sorted(o)
        if dataclasses.is_dataclass(o) and not isinstance(o, type):
            return {f.name: getattr(o, f.name) for f in dataclasses.fields(o)}
        return DefaultJSONProvider.default(o)


def ok(message: Optional[str] = None, *, status: int = 200, **payload: Any):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    body.update(payload)
    return jsonify(body), status


def fail(message: str, *, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    """Request payload from JSON or form data."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def current_name() -> str:
    return str(session.get("name") or "")


def current_employee_id() -> Optional[int]:
    employee_id = session.get("employee_id")
    return int(employee_id) if employee_id is not None else None


def require_self_or(user_id: int, allowed: Iterable[Role]) -> None:
    """Callers may act on their own account; anyone else needs one of ``allowed``."""
    if int(user_id) != current_user_id():
        require_role(current_role(), allowed)


def require_own_employee_or(employee_id: int, allowed: Iterable[Role]) -> None:
    if int(employee_id) != current_employee_id():
        require_role(current_role(), allowed)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Please log in to continue")
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                raise AuthenticationError("Please log in to continue")
            if Role(session.get("role")) not in allowed:
                raise AuthorizationError("You do not have permission for this action")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for cls, status in _STATUS_BY_ERROR:
            if isinstance(e, cls):
                return fail(str(e), status=status)
        return fail(str(e), status=400)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail(e.description or e.name, status=e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return fail(f"Server error: {e}", status=500)
        return fail("Server error", status=500)
