"""Product catalogue access used to build price lookups."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pos_pricing.models import Product
from pos_pricing.services.pricing import InMemoryPriceTable
from pos_pricing.services.pricing.money import to_money


async def create_product(
    session: AsyncSession,
    *,
    code: str,
    name: str,
    retail_price: Decimal,
    wholesale_price: Decimal,
    is_active: bool = True,
) -> Product:
    """Insert a product with both price tables."""

    retail = to_money(retail_price)
    wholesale = to_money(wholesale_price)
    if retail < 0 or wholesale < 0:
        raise ValueError("Product prices cannot be negative")

    existing = await get_product_by_code(session, code)
    if existing is not None:
        raise ValueError(f"Product code {code} already exists")

    product = Product(
        code=code,
        name=name,
        retail_price=retail,
        wholesale_price=wholesale,
        is_active=is_active,
    )
    session.add(product)
    await session.commit()
    await session.refresh(product)
    return product


async def get_product(session: AsyncSession, product_id: UUID) -> Product | None:
    return await session.get(Product, product_id)


async def get_product_by_code(session: AsyncSession, code: str) -> Product | None:
    result = await session.execute(select(Product).where(Product.code == code))
    return result.scalar_one_or_none()


async def set_active(session: AsyncSession, product_id: UUID, active: bool) -> Product:
    """Activate or retire a product."""

    product = await get_product(session, product_id)
    if product is None:
        raise ValueError("Product not found")
    product.is_active = active
    await session.commit()
    await session.refresh(product)
    return product


async def load_price_table(
    session: AsyncSession, product_ids: Iterable[UUID]
) -> InMemoryPriceTable:
    """Load the active products among ``product_ids`` into a price lookup.

    Missing and inactive products are left out, so the calculator reports
    them as unavailable.
    """

    ids = set(product_ids)
    if not ids:
        return InMemoryPriceTable()
    result = await session.execute(
        select(Product).where(Product.id.in_(ids), Product.is_active.is_(True))
    )
    return InMemoryPriceTable.from_products(result.scalars().all())
