"""Cart pricing endpoints."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from pos_pricing.api import deps
from pos_pricing.schemas.pricing import (
    CalculatedItemRead,
    PricingCalculationRead,
    PricingCalculationRequest,
)
from pos_pricing.services import pricing_service
from pos_pricing.services.pricing import (
    AllocatedLine,
    InvalidCartError,
    ProductUnavailableError,
)

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.post(
    "/calculate",
    response_model=PricingCalculationRead,
    summary="Calculate cart pricing",
)
async def calculate_cart_pricing(
    payload: PricingCalculationRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PricingCalculationRead:
    try:
        result = await pricing_service.calculate_cart_pricing(
            session,
            items=payload.items,
            is_wholesale=payload.is_wholesale,
            packaging_cost=payload.packaging_cost,
            user_final_price=payload.user_final_price,
            user_discount_percentage=payload.user_discount_percentage,
        )
    except ProductUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{exc}; refresh the cart and retry",
        ) from exc
    except InvalidCartError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return PricingCalculationRead.from_result(result)


@router.get(
    "/cart-item/{product_id}",
    response_model=CalculatedItemRead,
    summary="Price a product for the cart",
)
async def get_cart_item(
    product_id: UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    quantity: Annotated[int, Query(ge=1)] = 1,
    is_wholesale: Annotated[bool, Query(alias="isWholesale")] = False,
) -> CalculatedItemRead:
    try:
        line = await pricing_service.quote_cart_item(
            session,
            product_id=product_id,
            quantity=quantity,
            is_wholesale=is_wholesale,
        )
    except ProductUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        ) from exc
    return CalculatedItemRead.from_allocated(
        AllocatedLine(
            line=line,
            final_price=line.line_subtotal,
            unit_final_price=line.unit_price,
        )
    )
