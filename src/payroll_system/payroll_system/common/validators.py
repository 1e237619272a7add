from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def to_decimal(value: Any, field_name: str, *, default: Decimal = Decimal("0")) -> Decimal:
    """Coerce a numeric input; a missing value becomes ``default``."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return result


def require_non_negative(value: Any, field_name: str) -> Decimal:
    result = to_decimal(value, field_name)
    if result < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return result


def require_positive(value: Any, field_name: str) -> Decimal:
    result = to_decimal(value, field_name)
    if result <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return result


def require_work_days_per_week(value: Any) -> int:
    try:
        days = int(value)
    except (TypeError, ValueError):
        raise ValidationError("workDaysPerWeek must be 5 or 6")
    if days not in (5, 6):
        raise ValidationError("workDaysPerWeek must be 5 or 6")
    return days
