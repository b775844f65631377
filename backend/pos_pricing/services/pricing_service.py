"""Cart pricing service: loads prices and runs the allocation calculator."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pos_pricing.services import product_service
from pos_pricing.services.pricing import (
    CartLine,
    PricingResult,
    calculate,
    quote_line,
)
from pos_pricing.services.pricing.allocation import LineRequest

logger = logging.getLogger(__name__)


async def calculate_cart_pricing(
    session: AsyncSession,
    *,
    items: Sequence[LineRequest],
    is_wholesale: bool,
    packaging_cost: Decimal,
    user_final_price: Decimal,
    user_discount_percentage: Decimal,
) -> PricingResult:
    """Price a cart against the current product catalogue.

    Raises :class:`ProductUnavailableError` when any line cannot be priced.
    """

    if not items:
        return PricingResult.empty()

    lookup = await product_service.load_price_table(
        session, (item.product_id for item in items)
    )
    result = calculate(
        items,
        is_wholesale,
        packaging_cost,
        user_final_price,
        user_discount_percentage,
        lookup,
    )
    logger.info(
        "Priced cart of %s line(s) (%s): suggested %s, final %s",
        len(result.lines),
        "wholesale" if is_wholesale else "retail",
        result.suggested_total,
        result.final_price,
    )
    return result


async def quote_cart_item(
    session: AsyncSession,
    *,
    product_id: UUID,
    quantity: int,
    is_wholesale: bool,
) -> CartLine:
    """Price one product for adding to the cart."""

    lookup = await product_service.load_price_table(session, [product_id])
    return quote_line(product_id, quantity, is_wholesale, lookup)
