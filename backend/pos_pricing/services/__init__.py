"""Service layer exports."""
from pos_pricing.services import (
    cart_service,
    pricing_service,
    product_service,
)
from pos_pricing.services.cart_service import CartSession

__all__ = [
    "CartSession",
    "cart_service",
    "pricing_service",
    "product_service",
]
