from __future__ import annotations

from functools import wraps

import structlog
from flask import Flask, jsonify, request, session

from ..core.enums import EntrySource
from ..core.exceptions import (
    BadRequestError,
    ConflictError,
    DomainError,
    ForbiddenError,
    RecalculationError,
    ResourceNotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


def login_required(view):
    """The session is populated by the external auth layer; we only read it."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Unauthorized", "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")
    return data


def entry_source(value) -> EntrySource:
    if not value:
        return EntrySource.WEB
    try:
        source = EntrySource(str(value).upper())
    except ValueError:
        raise BadRequestError(f"Unknown entry source: {value!r}")
    if source == EntrySource.MANUAL:
        raise BadRequestError("MANUAL entries are created through /time/manage/entry")
    return source


def _problem(error: str, e: Exception, status: int):
    return jsonify({"error": error, "message": str(e)}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ConflictError)
    def _conflict(e: ConflictError):
        return _problem("Conflict", e, 409)

    @app.errorhandler(ResourceNotFoundError)
    def _not_found(e: ResourceNotFoundError):
        return _problem("Not Found", e, 404)

    @app.errorhandler(ForbiddenError)
    def _forbidden(e: ForbiddenError):
        return _problem("Forbidden", e, 403)

    @app.errorhandler(ValidationError)
    def _bad_request(e: ValidationError):
        return _problem("Bad Request", e, 400)

    @app.errorhandler(RecalculationError)
    def _recalculation(e: RecalculationError):
        body = {"error": "Recalculation Failed", "message": str(e)}
        if e.entry is not None:
            body["entry"] = e.entry.to_dict()
        return jsonify(body), 500

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        logger.warning("unmapped_domain_error", error_type=type(e).__name__, error=str(e))
        return _problem("Bad Request", e, 400)
