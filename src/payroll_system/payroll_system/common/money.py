from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round half-up to 2 decimal places. Only applied when presenting a result."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def money_json(value: Decimal) -> float:
    return float(round_money(value))


def number_json(value: Decimal) -> float | int:
    """Day counts stay integers; fractional day deductions keep their fraction."""
    value = Decimal(value)
    if value == value.to_integral_value():
        return int(value)
    return float(round_money(value))
