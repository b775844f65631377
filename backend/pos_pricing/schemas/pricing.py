"""Pricing schema definitions."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pos_pricing.services.pricing import AllocatedLine, PricingResult
from pos_pricing.services.pricing.money import clamp_percent, coerce_non_negative


class CartItemRequest(BaseModel):
    """A product and quantity in the cart."""

    product_id: uuid.UUID = Field(alias="productId")
    quantity: int = Field(ge=1)

    model_config = ConfigDict(populate_by_name=True)


class PricingCalculationRequest(BaseModel):
    """Input payload for calculating cart pricing.

    Negative or non-numeric amounts are treated as zero; a discount above
    100 is capped at 100.
    """

    items: list[CartItemRequest] = Field(default_factory=list)
    is_wholesale: bool = Field(default=False, alias="isWholesale")
    packaging_cost: Decimal = Field(default=Decimal("0"), alias="packagingCost")
    user_final_price: Decimal = Field(default=Decimal("0"), alias="userFinalPrice")
    user_discount_percentage: Decimal = Field(
        default=Decimal("0"), alias="userDiscountPercentage"
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("packaging_cost", "user_final_price", mode="before")
    @classmethod
    def _clamp_amount(cls, value: Any) -> Decimal:
        return coerce_non_negative(value)

    @field_validator("user_discount_percentage", mode="before")
    @classmethod
    def _clamp_percentage(cls, value: Any) -> Decimal:
        return clamp_percent(value)


class CalculatedItemRead(BaseModel):
    """One priced cart line."""

    product_id: uuid.UUID = Field(alias="productId")
    product_name: str = Field(alias="productName")
    product_code: str = Field(alias="productCode")
    quantity: int
    suggested_price: Decimal = Field(alias="suggestedPrice")
    total_price: Decimal = Field(alias="totalPrice")
    final_price: Decimal = Field(alias="finalPrice")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_allocated(cls, item: AllocatedLine) -> "CalculatedItemRead":
        return cls(
            product_id=item.line.product_id,
            product_name=item.line.product_name,
            product_code=item.line.product_code,
            quantity=item.line.quantity,
            suggested_price=item.line.unit_price,
            total_price=item.line.line_subtotal,
            final_price=item.final_price,
        )


class PricingCalculationRead(BaseModel):
    """Aggregated pricing response."""

    subtotal: Decimal
    packaging_cost: Decimal = Field(alias="packagingCost")
    suggested_total: Decimal = Field(alias="suggestedTotal")
    final_price: Decimal = Field(alias="finalPrice")
    discount_amount: Decimal = Field(alias="discountAmount")
    discount_percentage: Decimal = Field(alias="discountPercentage")
    calculated_items: list[CalculatedItemRead] = Field(
        default_factory=list, alias="calculatedItems"
    )

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_result(cls, result: PricingResult) -> "PricingCalculationRead":
        return cls(
            subtotal=result.subtotal,
            packaging_cost=result.packaging_cost,
            suggested_total=result.suggested_total,
            final_price=result.final_price,
            discount_amount=result.discount_amount,
            discount_percentage=result.discount_percentage,
            calculated_items=[
                CalculatedItemRead.from_allocated(item) for item in result.lines
            ],
        )
