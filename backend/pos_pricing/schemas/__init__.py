"""Schema exports."""

from pos_pricing.schemas.pricing import (
    CalculatedItemRead,
    CartItemRequest,
    PricingCalculationRead,
    PricingCalculationRequest,
)

__all__ = [
    "CalculatedItemRead",
    "CartItemRequest",
    "PricingCalculationRead",
    "PricingCalculationRequest",
]
