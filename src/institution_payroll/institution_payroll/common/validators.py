from __future__ import annotations

from datetime import date
from decimal import Decimal

from ..core.exceptions import InvalidRangeError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if end < start:
        raise InvalidRangeError(f"End date {end.isoformat()} is before start date {start.isoformat()}")
    return start, end


def require_non_negative(value: Decimal, field_name: str) -> Decimal:
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value


def require_month(year: int, month: int) -> tuple[int, int]:
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Invalid month: {month}")
    if not 1900 <= int(year) <= 9999:
        raise ValidationError(f"Invalid year: {year}")
    return int(year), int(month)
