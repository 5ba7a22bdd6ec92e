from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import ApiError, AuthorizationError, DomainError, SessionExpiredError, ValidationError

ADMIN_ROLE_VALUES = {Role.ADMIN.value, Role.SUPER_ADMIN.value}


def ok(message: Optional[str] = None, *, http_status: int = 200, **data):
    body = {"success": True, **data}
    if message:
        body["message"] = message
    return jsonify(body), http_status


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def error_response(e: DomainError, fallback: str):
    """Map a domain error to the transient message the client shows."""
    if isinstance(e, SessionExpiredError):
        session.clear()
        return fail(e.message, 401)
    if isinstance(e, AuthorizationError):
        return fail(str(e), 403)
    if isinstance(e, ValidationError):
        return fail(str(e), 400)
    if isinstance(e, ApiError):
        status = e.status if e.status and 400 <= e.status < 500 else 502
        return fail(e.message or fallback, status)
    return fail(fallback, 500)


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role") or Role.USER.value)
    except ValueError:
        return Role.USER


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please login to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please login to continue", 401)

        if session.get("role") not in ADMIN_ROLE_VALUES:
            return fail("You do not have permission to access this page", 403)

        return view(*args, **kwargs)

    return wrapper


def super_admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please login to continue", 401)

        if session.get("role") != Role.SUPER_ADMIN.value:
            return fail("You do not have permission to access this page", 403)

        return view(*args, **kwargs)

    return wrapper
