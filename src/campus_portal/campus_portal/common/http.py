from __future__ import annotations

from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import ValidationError


def success(message: Optional[str] = None, *, status: int = 200, **payload: Any):
    body: dict[str, Any] = {"status": "success"}
    if message:
        body["message"] = message
    body.update(payload)
    return jsonify(body), status


def error(message: str, status: int):
    return jsonify({"status": "error", "message": message}), status


def json_body() -> dict:
    """Request JSON as dict (empty when body is missing or not an object)."""

    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def uploaded_file(field: str):
    f = request.files.get(field)
    if f is None or not f.filename:
        return None
    return f
