"""Decimal helpers for two-place currency values."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert user or database input to Decimal without binary float drift."""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise InvalidOperation(f"not a number: {value!r}")
    elif isinstance(value, float):
        # repr round-trips the shortest decimal form, so 0.1 stays 0.1
        result = Decimal(repr(value))
    else:
        result = Decimal(str(value).strip())
    if not result.is_finite():
        raise InvalidOperation(f"not a finite number: {value!r}")
    return result


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Round to two places, half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
