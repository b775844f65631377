"""Cart pricing: re-quotes cart lines and allocates a global discount.

Every calculation re-prices all lines for the requested mode (retail or
wholesale) before totals are taken, so a mode switch is a full re-quote. The
same discount multiplier is applied to every line; there are no per-line
overrides.

When the caller supplies both a final price and a discount percentage, the
final price wins and the percentage is recomputed from it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from pos_pricing.services.pricing.errors import InvalidCartError
from pos_pricing.services.pricing.lookup import PriceLookup
from pos_pricing.services.pricing.money import (
    ZERO,
    clamp_percent,
    coerce_non_negative,
    discount_amount_for,
    discount_percentage_for,
    to_money,
)

logger = logging.getLogger(__name__)

_ONE = Decimal("1")


class LineRequest(Protocol):
    """Minimal shape of a requested cart line."""

    @property
    def product_id(self) -> UUID: ...

    @property
    def quantity(self) -> int: ...


@dataclass(slots=True, frozen=True)
class CartLine:
    """A product in the cart, priced for one mode."""

    product_id: UUID
    product_name: str
    product_code: str
    quantity: int
    unit_price: Decimal

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise InvalidCartError(
                f"Quantity for product {self.product_id} must be positive"
            )
        if self.unit_price < 0:
            raise InvalidCartError(
                f"Unit price for product {self.product_id} cannot be negative"
            )

    @property
    def line_subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(slots=True, frozen=True)
class AllocatedLine:
    """A cart line together with its share of the final price."""

    line: CartLine
    final_price: Decimal
    unit_final_price: Decimal


@dataclass(slots=True, frozen=True)
class PricingInput:
    """Everything needed to (re)calculate a cart."""

    lines: tuple[LineRequest, ...]
    is_wholesale: bool = False
    packaging_cost: Decimal = ZERO
    user_final_price: Decimal = ZERO
    user_discount_percentage: Decimal = ZERO


@dataclass(slots=True, frozen=True)
class PricingResult:
    """Aggregate and per-line pricing for a cart."""

    subtotal: Decimal
    packaging_cost: Decimal
    suggested_total: Decimal
    final_price: Decimal
    discount_amount: Decimal
    discount_percentage: Decimal
    lines: tuple[AllocatedLine, ...] = field(default_factory=tuple)
    allocated_packaging: Decimal = ZERO

    @classmethod
    def empty(cls) -> "PricingResult":
        return cls(
            subtotal=ZERO,
            packaging_cost=ZERO,
            suggested_total=ZERO,
            final_price=ZERO,
            discount_amount=ZERO,
            discount_percentage=ZERO,
        )

    @property
    def is_empty(self) -> bool:
        return not self.lines


def quote_line(
    product_id: UUID,
    quantity: int,
    is_wholesale: bool,
    lookup: PriceLookup,
) -> CartLine:
    """Price a single product for the cart."""
    quote = lookup.get_quote(product_id)
    return CartLine(
        product_id=quote.product_id,
        product_name=quote.name,
        product_code=quote.code,
        quantity=quantity,
        unit_price=to_money(quote.unit_price(is_wholesale)),
    )


def requote_lines(
    lines: Iterable[LineRequest],
    is_wholesale: bool,
    lookup: PriceLookup,
) -> list[CartLine]:
    """Re-price every line for ``is_wholesale``.

    Either every line is re-priced or the lookup error propagates and nothing
    is returned; the caller's lines are never touched.
    """
    return [
        quote_line(line.product_id, line.quantity, is_wholesale, lookup)
        for line in lines
    ]


def allocate(
    lines: Sequence[CartLine], multiplier: Decimal
) -> tuple[AllocatedLine, ...]:
    """Apply one discount multiplier uniformly to every line."""
    return tuple(
        AllocatedLine(
            line=line,
            final_price=to_money(line.line_subtotal * multiplier),
            unit_final_price=to_money(line.unit_price * multiplier),
        )
        for line in lines
    )


def calculate(
    lines: Sequence[LineRequest],
    is_wholesale: bool,
    packaging_cost: object,
    user_final_price: object,
    user_discount_percentage: object,
    price_lookup: PriceLookup,
) -> PricingResult:
    """Re-quote ``lines`` and compute totals plus the per-line allocation.

    An empty cart yields :meth:`PricingResult.empty` without consulting the
    lookup. A product the lookup cannot price fails the whole call with
    :class:`ProductUnavailableError`.
    """
    if not lines:
        return PricingResult.empty()

    quoted = requote_lines(lines, is_wholesale, price_lookup)

    packaging = to_money(coerce_non_negative(packaging_cost))
    requested_final = coerce_non_negative(user_final_price)
    requested_percent = clamp_percent(user_discount_percentage)

    subtotal = sum((line.line_subtotal for line in quoted), ZERO)
    suggested_total = subtotal + packaging

    if requested_final > 0:
        final_price = to_money(requested_final)
    elif requested_percent > 0:
        final_price = suggested_total - discount_amount_for(
            suggested_total, requested_percent
        )
    else:
        final_price = suggested_total

    discount_amount = max(ZERO, suggested_total - final_price)
    discount_percentage = discount_percentage_for(suggested_total, final_price)

    # Lines use the unrounded ratio so the per-line rounding drift stays bounded.
    if suggested_total > 0:
        multiplier = _ONE - discount_amount / suggested_total
    else:
        multiplier = _ONE
    allocated = allocate(quoted, multiplier)

    logger.debug(
        "Cart pricing calculated - lines: %s, suggested: %s, final: %s, "
        "discount: %s%%, amount: %s",
        len(allocated),
        suggested_total,
        final_price,
        discount_percentage,
        discount_amount,
    )

    return PricingResult(
        subtotal=subtotal,
        packaging_cost=packaging,
        suggested_total=suggested_total,
        final_price=final_price,
        discount_amount=discount_amount,
        discount_percentage=discount_percentage,
        lines=allocated,
        allocated_packaging=to_money(packaging * multiplier),
    )


def calculate_input(pricing_input: PricingInput, price_lookup: PriceLookup) -> PricingResult:
    """Run :func:`calculate` for a prepared :class:`PricingInput`."""
    return calculate(
        pricing_input.lines,
        pricing_input.is_wholesale,
        pricing_input.packaging_cost,
        pricing_input.user_final_price,
        pricing_input.user_discount_percentage,
        price_lookup,
    )


def allocation_drift(result: PricingResult) -> Decimal:
    """Difference between the allocated amounts and the final price.

    At most one cent per line when the final price does not exceed the
    suggested total.
    """
    allocated = sum((item.final_price for item in result.lines), ZERO)
    return allocated + result.allocated_packaging - result.final_price


__all__ = [
    "AllocatedLine",
    "CartLine",
    "LineRequest",
    "PricingInput",
    "PricingResult",
    "allocate",
    "allocation_drift",
    "calculate",
    "calculate_input",
    "quote_line",
    "requote_lines",
]
