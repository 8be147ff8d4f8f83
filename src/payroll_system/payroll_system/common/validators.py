from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return value.strip()


def require_decimal(value: Any, field_name: str) -> Decimal:
    try:
        out = Decimal(str(value).strip())
    except (InvalidOperation, AttributeError):
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    if not out.is_finite():
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    return out


def require_in_range(value: Decimal, field_name: str, minimum: Decimal, maximum: Decimal) -> Decimal:
    if value < minimum or value > maximum:
        raise ValidationError(f"{field_name} must be between {minimum} and {maximum}", field=field_name)
    return value


def require_int_in_range(value: Any, field_name: str, minimum: int, maximum: int) -> int:
    try:
        out = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number", field=field_name)
    if out < minimum or out > maximum:
        raise ValidationError(f"{field_name} must be between {minimum} and {maximum}", field=field_name)
    return out
