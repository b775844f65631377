"""Linked discount-percentage / final-price inputs for a cart.

The controller keeps exactly one of the two fields authoritative per edit:
editing the final price derives the discount, editing the discount derives
the final price. An explicit edit state stands in for re-entrancy flags; an
edit coming from the other field while a commit is in progress (typically a
listener writing back) is rejected, not queued. Edits from both fields in
the same tick are therefore not supported.

Any change to the cart composition or pricing mode resets the discount to
zero and the final price to the new suggested total, discarding whatever
the user had entered.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from pos_pricing.services.pricing.money import (
    HUNDRED,
    ZERO,
    clamp_percent,
    coerce_non_negative,
    round_percent,
    to_money,
)

logger = logging.getLogger(__name__)


class EditState(str, enum.Enum):
    """Which linked field, if any, is currently being committed."""

    IDLE = "idle"
    EDITING_DISCOUNT = "editing_discount"
    EDITING_PRICE = "editing_price"


@dataclass(slots=True, frozen=True)
class PricingSnapshot:
    """Committed values of the linked fields."""

    suggested_total: Decimal
    final_price: Decimal
    discount_percent: Decimal


Listener = Callable[[PricingSnapshot], None]


class ReconciliationController:
    """Owns the discount percentage and final price of one cart."""

    def __init__(self, suggested_total: object = ZERO) -> None:
        self._suggested_total = to_money(coerce_non_negative(suggested_total))
        self._final_price = self._suggested_total
        self._discount_percent = ZERO
        self._state = EditState.IDLE
        self._listeners: list[Listener] = []

    @property
    def suggested_total(self) -> Decimal:
        return self._suggested_total

    @property
    def final_price(self) -> Decimal:
        return self._final_price

    @property
    def discount_percent(self) -> Decimal:
        return self._discount_percent

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def updating_from_discount(self) -> bool:
        return self._state is EditState.EDITING_DISCOUNT

    @property
    def updating_from_price(self) -> bool:
        return self._state is EditState.EDITING_PRICE

    def snapshot(self) -> PricingSnapshot:
        return PricingSnapshot(
            suggested_total=self._suggested_total,
            final_price=self._final_price,
            discount_percent=self._discount_percent,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for commits; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def on_cart_or_mode_changed(self, new_suggested_total: object) -> None:
        """Reset both fields for a rebuilt cart."""
        self._suggested_total = to_money(coerce_non_negative(new_suggested_total))
        self._final_price = self._suggested_total
        self._discount_percent = ZERO
        logger.debug("Cart changed - pricing reset to %s", self._suggested_total)
        self._notify()

    def set_final_price(self, value: object) -> bool:
        """Commit a user-entered final price and derive the discount.

        The price is committed as entered; only the derived percentage is
        rounded.

        Returns ``False`` when the edit was rejected because a discount edit
        is being committed.
        """
        if self._state is EditState.EDITING_DISCOUNT:
            logger.debug("Final price edit ignored while discount is updating")
            return False

        final_price = coerce_non_negative(value)
        suggested = self._suggested_total
        if suggested > 0 and final_price < suggested:
            discount = round_percent((suggested - final_price) / suggested * HUNDRED)
        else:
            discount = ZERO

        previous = self._state
        self._state = EditState.EDITING_PRICE
        try:
            self._final_price = final_price
            self._discount_percent = discount
            self._notify()
        finally:
            self._state = previous
        return True

    def set_discount_percent(self, value: object) -> bool:
        """Commit a user-entered discount percentage and derive the final price.

        Returns ``False`` when the edit was rejected because a final price
        edit is being committed.
        """
        if self._state is EditState.EDITING_PRICE:
            logger.debug("Discount edit ignored while final price is updating")
            return False

        percent = clamp_percent(value)
        suggested = self._suggested_total
        final_price = to_money(suggested - suggested * percent / HUNDRED)

        previous = self._state
        self._state = EditState.EDITING_DISCOUNT
        try:
            self._final_price = final_price
            self._discount_percent = percent if suggested > 0 else ZERO
            self._notify()
        finally:
            self._state = previous
        return True

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)


__all__ = [
    "EditState",
    "Listener",
    "PricingSnapshot",
    "ReconciliationController",
]
