"""Product catalogue model carrying the retail and wholesale price tables."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, DateTime, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from pos_pricing.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Product(Base):
    """Sellable product with one unit price per pricing mode.

    Prices change through ``updated_at``; retiring a product clears
    ``is_active`` so open carts fail to re-quote it.
    """

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("retail_price >= 0", name="ck_products_retail_price"),
        CheckConstraint("wholesale_price >= 0", name="ck_products_wholesale_price"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    retail_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    wholesale_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )
