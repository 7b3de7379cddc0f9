from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable

from flask import jsonify, request, session

from ..attendance.session_state import AttendanceSessionState, SessionStateHolder
from ..core.constants import SESSION_STATE_KEY
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    EmployeeNotFound,
    MissingLocation,
    StoreUnavailable,
    TransitionRejected,
    ValidationError,
)

logger = logging.getLogger(__name__)


def ok(payload: dict | None = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def fail(message: str, status: int, **extra: Any):
    body: dict[str, Any] = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def error_response(exc: Exception, *, failure_message: str):
    """Turn an exception raised by a user action into a JSON notification."""
    if isinstance(exc, MissingLocation):
        return fail(str(exc), 400, reason=exc.reason.value)
    if isinstance(exc, TransitionRejected):
        return fail(str(exc), 409, reason=exc.reason.value)
    if isinstance(exc, EmployeeNotFound):
        return fail(str(exc), 404)
    if isinstance(exc, ValidationError):
        return fail(str(exc), 400)
    if isinstance(exc, AuthenticationError):
        return fail(str(exc), 401)
    if isinstance(exc, AuthorizationError):
        return fail(str(exc), 403)
    if isinstance(exc, StoreUnavailable):
        return fail(failure_message, 503)
    logger.exception("Unhandled error in %s %s", request.method, request.path)
    return fail(failure_message, 500)


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def state_holder() -> SessionStateHolder:
    """Session state for this request; replacements are written back to the cookie."""
    holder = SessionStateHolder(AttendanceSessionState.from_dict(session.get(SESSION_STATE_KEY)))

    def _persist(_old: AttendanceSessionState, new: AttendanceSessionState) -> None:
        session[SESSION_STATE_KEY] = new.to_dict()

    holder.subscribe(_persist)
    return holder


def admin_required(view: Callable):
    @wraps(view)
    def wrapper(*args, **kwargs):
        state = AttendanceSessionState.from_dict(session.get(SESSION_STATE_KEY))
        if not state.admin_authorized:
            return fail("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper
