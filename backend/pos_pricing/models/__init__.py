"""ORM models package export."""

from pos_pricing.models.product import Product

__all__ = ["Product"]
