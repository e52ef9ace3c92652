from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from flask import Response, jsonify

from speechdrop.utils.errors import ServiceError


def jerror(message: str, status: int = 400, details: Optional[str] = None) -> Tuple[Response, int]:
    body: Dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        body["details"] = details
    return jsonify(body), status


def jok(data: Dict[str, Any], status: int = 200) -> Tuple[Response, int]:
    return jsonify({"success": True, **data}), status


def jservice_error(err: ServiceError) -> Tuple[Response, int]:
    return jerror(err.message, err.status, err.details)
