"""Exceptions raised by the pricing engine."""

from __future__ import annotations

from uuid import UUID


class PricingError(Exception):
    """Base class for pricing failures."""

    retryable = False


class ProductUnavailableError(PricingError):
    """A cart line references a product that can no longer be priced.

    The whole calculation is abandoned; callers keep their last good result
    and may retry once the cart has been corrected.
    """

    retryable = True

    def __init__(self, product_id: UUID, reason: str = "not available") -> None:
        self.product_id = product_id
        self.reason = reason
        super().__init__(f"Product {product_id} is {reason} for pricing")


class InvalidCartError(PricingError):
    """A cart line is malformed (for example a non-positive quantity)."""


__all__ = ["InvalidCartError", "PricingError", "ProductUnavailableError"]
