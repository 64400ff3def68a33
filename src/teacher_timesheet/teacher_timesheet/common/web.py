from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, current_app, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, ForbiddenError, ValidationError

logger = logging.getLogger(__name__)

ADMIN_SESSION_KEY = "is_admin"


def is_admin() -> bool:
    return bool(session.get(ADMIN_SESSION_KEY, False))


def grant_admin() -> None:
    session.permanent = True
    session[ADMIN_SESSION_KEY] = True


def revoke_admin() -> None:
    session[ADMIN_SESSION_KEY] = False


def admin_required(view):
    """Re-check the admin flag on every request; nothing is cached server-side."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_admin():
            raise ForbiddenError("Admin access required")
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def client_key() -> str:
    return request.remote_addr or "-"


def message(text: str, status: int = 200):
    return jsonify({"message": text}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, e.message)
        return message(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return message(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.critical("Unhandled error on %s %s", request.method, request.path, exc_info=e)
        if current_app.config.get("DEBUG"):
            return message(f"Internal server error: {e}", 500)
        return message("Internal server error", 500)
