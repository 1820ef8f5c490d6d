from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from flask import jsonify, request
from flask.json.provider import DefaultJSONProvider

from ..core.enums import ErrorKind
from ..core.result import OperationResult

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE: 500,
}


class AcademyJSONProvider(DefaultJSONProvider):
    """Serialize dates as YYYY-MM-DD and money as exact decimal strings."""

    @staticmethod
    def default(o: Any) -> Any:
        if isinstance(o, date):
            return o.isoformat()
        if isinstance(o, Decimal):
            return str(o)
        return DefaultJSONProvider.default(o)


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def json_result(result: OperationResult, *, key: Optional[str] = None, status: int = 200):
    if not result.ok:
        return jsonify({"success": False, "message": result.error}), _STATUS_BY_KIND.get(result.error_kind, 500)

    body: dict[str, Any] = {"success": True}
    if key is not None:
        body[key] = result.data
    elif isinstance(result.data, dict):
        body.update(result.data)
    elif is_dataclass(result.data):
        body.update(asdict(result.data))
    return jsonify(body), status
