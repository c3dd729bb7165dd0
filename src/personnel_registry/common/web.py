from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import jsonify, request, session

from .validators import as_text
from ..core.constants import SESSION_KEY
from ..core.exceptions import AuthenticationError, AuthorizationError


def payload() -> Mapping[str, Any]:
    """Submitted fields, from an HTML form or a JSON body."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form


def service_number_from(data: Mapping[str, Any]) -> Optional[str]:
    value = data.get("svcNo") or data.get("serviceNumber")
    return as_text(value, "Service Number")


def wants_json() -> bool:
    if request.is_json:
        return True
    best = request.accept_mimetypes.best_match(["text/html", "application/json"])
    return best == "application/json"


def error_response(code: str, message: str, status: int):
    return jsonify({"success": False, "code": code, "message": message}), status


def start_session(service_number: str) -> None:
    session.clear()
    session.permanent = True
    session[SESSION_KEY] = service_number


def require_acting_as(service_number: Optional[str]) -> None:
    """The single login check: the signed session must belong to ``service_number``."""
    current = session.get(SESSION_KEY)
    if not current:
        raise AuthenticationError("Please log in first.")
    if service_number and service_number != current:
        raise AuthorizationError("You can only act on your own profile.")
