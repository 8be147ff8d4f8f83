from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def money(value: Any) -> Decimal:
    """Round to centavos, half-up."""
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(amount: Any) -> str:
    return f"₱{money(amount):,.2f}"
