"""In-memory cart session backing a record-sale screen."""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal
from uuid import UUID

from pos_pricing.services.pricing import (
    CartLine,
    PriceLookup,
    PricingInput,
    PricingResult,
    PricingSnapshot,
    RecalculationScheduler,
    ReconciliationController,
    calculate_input,
    quote_line,
    requote_lines,
)
from pos_pricing.services.pricing.money import ZERO, coerce_non_negative, to_money
from pos_pricing.services.pricing.scheduler import ErrorCallback, ResultCallback

logger = logging.getLogger(__name__)


class CartSession:
    """Cart lines, pricing mode and packaging cost for one sale in progress.

    Every mutation rebuilds the pricing baseline and resets the linked
    discount / final price fields through the reconciliation controller.
    Once :meth:`start_recalculation` is called, each committed change is
    handed to a debounced :class:`RecalculationScheduler`, whose newest
    result is exposed as :attr:`last_result`.
    """

    def __init__(
        self,
        lookup: PriceLookup,
        *,
        is_wholesale: bool = False,
        packaging_cost: object = ZERO,
        debounce_seconds: float | None = None,
        on_result: ResultCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._lookup = lookup
        self._lines: dict[UUID, CartLine] = {}
        self._is_wholesale = is_wholesale
        self._packaging_cost = to_money(coerce_non_negative(packaging_cost))
        self.controller = ReconciliationController()
        self.recalculation = RecalculationScheduler(
            self._calculate_async,
            debounce_seconds=debounce_seconds,
            on_result=on_result,
            on_error=on_error,
        )
        self._stop_recalculation: Callable[[], None] | None = None

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def is_wholesale(self) -> bool:
        return self._is_wholesale

    @property
    def packaging_cost(self) -> Decimal:
        return self._packaging_cost

    @property
    def last_result(self) -> PricingResult | None:
        return self.recalculation.last_result

    @property
    def item_count(self) -> int:
        return len(self._lines)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_subtotal for line in self._lines.values()), ZERO)

    @property
    def suggested_total(self) -> Decimal:
        if not self._lines:
            return ZERO
        return self.subtotal + self._packaging_cost

    def add_product(self, product_id: UUID, quantity: int = 1) -> CartLine:
        """Add ``quantity`` of a product, merging with an existing line."""
        existing = self._lines.get(product_id)
        total_quantity = quantity + (existing.quantity if existing else 0)
        line = quote_line(product_id, total_quantity, self._is_wholesale, self._lookup)
        self._lines[product_id] = line
        self._rebuild()
        return line

    def update_quantity(self, product_id: UUID, quantity: int) -> CartLine | None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_product(product_id)
            return None
        if product_id not in self._lines:
            raise KeyError(product_id)
        line = quote_line(product_id, quantity, self._is_wholesale, self._lookup)
        self._lines[product_id] = line
        self._rebuild()
        return line

    def remove_product(self, product_id: UUID) -> bool:
        if self._lines.pop(product_id, None) is None:
            return False
        self._rebuild()
        return True

    def clear(self) -> None:
        self._lines.clear()
        self._rebuild()

    def set_wholesale(self, is_wholesale: bool) -> None:
        """Switch pricing mode, re-quoting every line or none of them."""
        if is_wholesale == self._is_wholesale:
            return
        requoted = requote_lines(self._lines.values(), is_wholesale, self._lookup)
        self._lines = {line.product_id: line for line in requoted}
        self._is_wholesale = is_wholesale
        logger.debug(
            "Cart switched to %s pricing (%s lines)",
            "wholesale" if is_wholesale else "retail",
            len(requoted),
        )
        self._rebuild()

    def set_packaging_cost(self, value: object) -> None:
        self._packaging_cost = to_money(coerce_non_negative(value))
        self._rebuild()

    def pricing_input(self) -> PricingInput:
        """Build the calculator request from the cart and the linked fields."""
        snapshot = self.controller.snapshot()
        return PricingInput(
            lines=tuple(self._lines.values()),
            is_wholesale=self._is_wholesale,
            packaging_cost=self._packaging_cost,
            user_final_price=snapshot.final_price,
            user_discount_percentage=snapshot.discount_percent,
        )

    def calculate(self) -> PricingResult:
        return calculate_input(self.pricing_input(), self._lookup)

    def watch(self, callback: Callable[[PricingInput], None]) -> Callable[[], None]:
        """Call ``callback`` with a fresh request after every committed change."""

        def _forward(_: PricingSnapshot) -> None:
            callback(self.pricing_input())

        return self.controller.subscribe(_forward)

    def start_recalculation(self) -> None:
        """Feed every committed change to the scheduler; needs a running loop."""
        if self._stop_recalculation is None:
            self._stop_recalculation = self.watch(self.recalculation.request)
            self.recalculation.request(self.pricing_input())

    async def aclose(self) -> None:
        if self._stop_recalculation is not None:
            self._stop_recalculation()
            self._stop_recalculation = None
        await self.recalculation.aclose()

    async def _calculate_async(self, pricing_input: PricingInput) -> PricingResult:
        return calculate_input(pricing_input, self._lookup)

    def _rebuild(self) -> None:
        self.controller.on_cart_or_mode_changed(self.suggested_total)


__all__ = ["CartSession"]
