from __future__ import annotations

from datetime import date
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, ValidationError, WriteError
from .datetime_utils import parse_iso_date


def ok(payload: Optional[dict] = None, *, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def fail(message: str, *, status: int, field: Optional[str] = None):
    body: dict[str, Any] = {"success": False, "message": message}
    if field:
        body["field"] = field
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object", field="body")
    return data


def date_field(data: dict, name: str, *, required: bool = True) -> Optional[date]:
    raw = data.get(name)
    if isinstance(raw, str):
        raw = raw.strip()
    if not raw:
        if required:
            raise ValidationError(f"{name} is required", field=name)
        return None
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"{name} must be a YYYY-MM-DD date", field=name)


def int_field(data: dict, name: str, *, required: bool = True) -> Optional[int]:
    raw = data.get(name)
    if raw is None or raw == "":
        if required:
            raise ValidationError(f"{name} is required", field=name)
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer", field=name)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return fail(str(e), status=404, field=e.field)

    @app.errorhandler(ValidationError)
    def _invalid(e: ValidationError):
        return fail(str(e), status=400, field=e.field)

    @app.errorhandler(WriteError)
    def _write(e: WriteError):
        app.logger.error("Store rejected write: %s", e)
        return fail("Nothing was saved, try again", status=503)
