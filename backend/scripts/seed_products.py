"""Seed a demo product catalogue with retail and wholesale prices."""

from __future__ import annotations

import asyncio
from decimal import Decimal

from pos_pricing.db.session import get_sessionmaker
from pos_pricing.services import product_service

DEMO_PRODUCTS: tuple[tuple[str, str, str, str], ...] = (
    ("BR-001", "Silver bracelet", "28.00", "19.50"),
    ("NK-014", "Pearl necklace", "45.00", "31.00"),
    ("ER-102", "Stud earrings", "12.00", "8.40"),
    ("RG-230", "Enamel ring", "22.50", "15.75"),
    ("GB-001", "Gift box", "2.50", "1.80"),
)


async def seed_products() -> None:
    sessionmaker = get_sessionmaker()
    created = 0
    async with sessionmaker() as session:
        for code, name, retail, wholesale in DEMO_PRODUCTS:
            if await product_service.get_product_by_code(session, code) is not None:
                continue
            await product_service.create_product(
                session,
                code=code,
                name=name,
                retail_price=Decimal(retail),
                wholesale_price=Decimal(wholesale),
            )
            created += 1

    print(f"Seeded {created} product(s).")


def main() -> None:
    asyncio.run(seed_products())


if __name__ == "__main__":
    main()
