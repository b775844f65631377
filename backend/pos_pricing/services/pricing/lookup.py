"""Price lookup contract consumed by the allocation calculator."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from pos_pricing.services.pricing.errors import ProductUnavailableError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from pos_pricing.models import Product


@dataclass(slots=True, frozen=True)
class ProductQuote:
    """Both unit price tables for a single product."""

    product_id: UUID
    name: str
    code: str
    retail_price: Decimal
    wholesale_price: Decimal

    def unit_price(self, is_wholesale: bool) -> Decimal:
        return self.wholesale_price if is_wholesale else self.retail_price


class PriceLookup(Protocol):
    """Anything able to quote a product by id."""

    def get_quote(self, product_id: UUID) -> ProductQuote:
        """Return the quote or raise :class:`ProductUnavailableError`."""
        ...


class InMemoryPriceTable:
    """Dictionary-backed :class:`PriceLookup`."""

    def __init__(self, quotes: Iterable[ProductQuote] = ()) -> None:
        self._quotes: dict[UUID, ProductQuote] = {}
        for quote in quotes:
            self.add(quote)

    @classmethod
    def from_products(cls, products: Iterable["Product"]) -> "InMemoryPriceTable":
        """Build a table from active ORM products; inactive ones are skipped."""
        return cls(
            ProductQuote(
                product_id=product.id,
                name=product.name,
                code=product.code,
                retail_price=product.retail_price,
                wholesale_price=product.wholesale_price,
            )
            for product in products
            if product.is_active
        )

    def add(self, quote: ProductQuote) -> None:
        self._quotes[quote.product_id] = quote

    def remove(self, product_id: UUID) -> None:
        self._quotes.pop(product_id, None)

    def get_quote(self, product_id: UUID) -> ProductQuote:
        quote = self._quotes.get(product_id)
        if quote is None:
            raise ProductUnavailableError(product_id)
        return quote

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._quotes

    def __len__(self) -> int:
        return len(self._quotes)


__all__ = ["InMemoryPriceTable", "PriceLookup", "ProductQuote"]
