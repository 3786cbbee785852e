from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role, SessionKind
from ..core.exceptions import ValidationError


def error_body(kind: str, message: str) -> dict:
    return {"success": False, "error": kind, "message": message}


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify(error_body("unauthorized", "Please sign in to continue")), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify(error_body("unauthorized", "Please sign in to continue")), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify(error_body("forbidden", "Administrator access required")), 403
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def parse_kind(value) -> SessionKind:
    try:
        return SessionKind((value or SessionKind.REGULAR.value).strip().lower())
    except ValueError:
        raise ValidationError("kind must be 'regular' or 'overtime'")
