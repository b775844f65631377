"""Service-level tests for catalogue-backed cart pricing."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal

import pytest

from pos_pricing.db.session import get_sessionmaker
from pos_pricing.services import pricing_service, product_service
from pos_pricing.services.pricing import ProductUnavailableError

pytestmark = pytest.mark.asyncio


@dataclass(frozen=True)
class Item:
    product_id: uuid.UUID
    quantity: int


async def test_calculate_cart_pricing_uses_catalogue(reset_database, db_url) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        ring = await product_service.create_product(
            session,
            code="RG-230",
            name="Enamel ring",
            retail_price=Decimal("22.50"),
            wholesale_price=Decimal("15.75"),
        )
        box = await product_service.create_product(
            session,
            code="GB-001",
            name="Gift box",
            retail_price=Decimal("2.50"),
            wholesale_price=Decimal("1.80"),
        )

        result = await pricing_service.calculate_cart_pricing(
            session,
            items=[Item(ring.id, 2), Item(box.id, 1)],
            is_wholesale=True,
            packaging_cost=Decimal("3.00"),
            user_final_price=Decimal("30.00"),
            user_discount_percentage=Decimal("0"),
        )

    assert result.subtotal == Decimal("33.30")
    assert result.suggested_total == Decimal("36.30")
    assert result.final_price == Decimal("30.00")
    assert result.discount_amount == Decimal("6.30")
    assert result.discount_percentage == Decimal("17.36")
    assert [item.line.unit_price for item in result.lines] == [
        Decimal("15.75"),
        Decimal("1.80"),
    ]


async def test_retired_product_cannot_be_priced(reset_database, db_url) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        charm = await product_service.create_product(
            session,
            code="CH-010",
            name="Heart charm",
            retail_price=Decimal("6.00"),
            wholesale_price=Decimal("4.00"),
        )
        line = await pricing_service.quote_cart_item(
            session, product_id=charm.id, quantity=2, is_wholesale=False
        )
        assert line.line_subtotal == Decimal("12.00")

        await product_service.set_active(session, charm.id, False)

        with pytest.raises(ProductUnavailableError):
            await pricing_service.calculate_cart_pricing(
                session,
                items=[Item(charm.id, 2)],
                is_wholesale=False,
                packaging_cost=Decimal("0"),
                user_final_price=Decimal("0"),
                user_discount_percentage=Decimal("0"),
            )


async def test_create_product_rejects_duplicates_and_negatives(
    reset_database, db_url
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await product_service.create_product(
            session,
            code="BR-001",
            name="Silver bracelet",
            retail_price=Decimal("28.00"),
            wholesale_price=Decimal("19.50"),
        )
        with pytest.raises(ValueError):
            await product_service.create_product(
                session,
                code="BR-001",
                name="Copy",
                retail_price=Decimal("1.00"),
                wholesale_price=Decimal("1.00"),
            )
        with pytest.raises(ValueError):
            await product_service.create_product(
                session,
                code="BR-002",
                name="Broken",
                retail_price=Decimal("-1.00"),
                wholesale_price=Decimal("1.00"),
            )


async def test_empty_cart_skips_catalogue(reset_database, db_url) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        result = await pricing_service.calculate_cart_pricing(
            session,
            items=[],
            is_wholesale=False,
            packaging_cost=Decimal("5"),
            user_final_price=Decimal("0"),
            user_discount_percentage=Decimal("10"),
        )

    assert result.is_empty
    assert result.final_price == Decimal("0")
