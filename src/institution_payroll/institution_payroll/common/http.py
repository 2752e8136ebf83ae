"""Small helpers shared by the JSON controllers."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from flask import jsonify, request

from ..core.enums import EmployeeType
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date
from .money import to_decimal


def as_json(value: Any) -> Any:
    """Dataclasses, enums, decimals and dates to JSON-ready primitives."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: as_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k.isoformat() if isinstance(k, date) else k): as_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [as_json(v) for v in value]
    if isinstance(value, Exception):
        return str(value)
    return value


def ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": as_json(data)}), status


def json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def parse_date_value(value: Optional[str], field_name: str) -> date:
    if not value:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")


def parse_datetime_value(value: Optional[str], field_name: str) -> datetime:
    if not value:
        raise ValidationError(f"{field_name} is required")
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO timestamp")


def parse_decimal_value(value: Any, field_name: str) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a number")


def parse_employee_type(value: str) -> EmployeeType:
    try:
        return EmployeeType(value)
    except ValueError:
        raise ValidationError(f"Unknown employee type: {value}")


def parse_enum(enum_cls, value: Any, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value}")
