from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..users.service import SessionUser


def store_session_user(s_user: SessionUser) -> None:
    session["user_id"] = s_user.user_id
    session["name"] = s_user.full_name
    session["email"] = s_user.email
    session["company"] = s_user.company


def current_session_user() -> Optional[SessionUser]:
    """Rebuild the explicit session context passed into services."""
    if "user_id" not in session:
        return None
    return SessionUser(
        user_id=int(session["user_id"]),
        full_name=session.get("name", ""),
        email=session.get("email", ""),
        company=session.get("company", ""),
    )


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Faça login para continuar", 401)
        return view(*args, **kwargs)

    return wrapper
