"""JSON helpers shared by the Flask controllers."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any

import mysql.connector
from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    ConfirmationRequiredError,
    DomainError,
    NotFoundError,
    StateConflictError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def to_json(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json(v) for v in value]
    return value


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def date_arg(data: dict, key: str) -> date:
    return parse_iso_date(str(data.get(key) or ""), key)


def current_role() -> Role | None:
    role = session.get("role")
    try:
        return Role(role) if role else None
    except ValueError:
        return None


def current_user_id() -> str:
    return str(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session or current_role() is None:
            return jsonify({"error": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session or current_role() is None:
                return jsonify({"error": "Please sign in to continue"}), 401
            if current_role() != role:
                return jsonify({"error": "You do not have permission for this action"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
employee_required = role_required(Role.EMPLOYEE)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"error": str(e), "field": e.field}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return jsonify({"error": str(e)}), 403

    @app.errorhandler(ConfirmationRequiredError)
    def _confirm(e: ConfirmationRequiredError):
        return jsonify({"error": str(e), "confirmation_required": True, "warnings": e.warnings}), 409

    @app.errorhandler(StateConflictError)
    def _conflict(e: StateConflictError):
        return jsonify({"error": str(e)}), 409

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(mysql.connector.Error)
    def _storage(e: mysql.connector.Error):
        logger.exception("storage request failed: %s %s", request.method, request.path)
        return jsonify({"error": "Storage is unavailable; the change may not have been saved. Reload and retry."}), 503

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return jsonify({"error": e.description}), e.code
