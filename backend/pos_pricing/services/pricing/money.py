"""Decimal helpers shared by the pricing engine."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Final

ZERO: Final = Decimal("0.00")
HUNDRED: Final = Decimal("100")

MONEY_PLACES: Final = Decimal("0.01")
PERCENT_PLACES: Final = Decimal("0.1")
STORED_PERCENT_PLACES: Final = Decimal("0.01")
RATIO_PLACES: Final = Decimal("0.0001")


def coerce_non_negative(value: object) -> Decimal:
    """Parse user input into a finite, non-negative ``Decimal``.

    Anything that is missing, non-numeric, NaN, infinite or negative becomes
    zero so that no invalid value reaches the allocation math.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not amount.is_finite() or amount < 0:
        return ZERO
    return amount


def to_money(value: Decimal | int | str) -> Decimal:
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def round_percent(value: Decimal) -> Decimal:
    """Round a percentage to one decimal place, half up."""
    return value.quantize(PERCENT_PLACES, rounding=ROUND_HALF_UP)


def clamp_percent(value: object) -> Decimal:
    return min(coerce_non_negative(value), HUNDRED)


def discount_percentage_for(suggested_total: Decimal, final_price: Decimal) -> Decimal:
    """Return the discount share of ``suggested_total`` as a stored percentage.

    The ratio is rounded to four places before scaling, so the result carries
    two decimals. A final price above the suggested total yields zero.
    """
    if suggested_total <= 0:
        return ZERO
    discount = max(ZERO, suggested_total - final_price)
    ratio = (discount / suggested_total).quantize(RATIO_PLACES, rounding=ROUND_HALF_UP)
    return (ratio * HUNDRED).quantize(STORED_PERCENT_PLACES, rounding=ROUND_HALF_UP)


def discount_amount_for(total: Decimal, percentage: Decimal) -> Decimal:
    if total <= 0 or percentage <= 0:
        return ZERO
    return to_money(total * percentage / HUNDRED)


__all__ = [
    "HUNDRED",
    "MONEY_PLACES",
    "ZERO",
    "clamp_percent",
    "coerce_non_negative",
    "discount_amount_for",
    "discount_percentage_for",
    "round_percent",
    "to_money",
]
