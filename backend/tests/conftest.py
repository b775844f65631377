"""Test fixtures for the pricing backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("RECALC_DEBOUNCE_MS", "0")

from pos_pricing.core.config import get_settings
from pos_pricing.db.base import Base
from pos_pricing.db.session import dispose_engine, get_engine, get_sessionmaker
from pos_pricing.main import app
from pos_pricing.models import Product


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    async with get_engine(db_url).begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(
    reset_database: AsyncIterator[None], db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client and a seeded product catalogue."""
    sessionmaker = get_sessionmaker(db_url)

    async with sessionmaker() as session:
        bracelet = Product(
            code="BR-001",
            name="Silver bracelet",
            retail_price=Decimal("10.00"),
            wholesale_price=Decimal("7.00"),
        )
        necklace = Product(
            code="NK-014",
            name="Pearl necklace",
            retail_price=Decimal("45.00"),
            wholesale_price=Decimal("31.00"),
        )
        earrings = Product(
            code="ER-102",
            name="Stud earrings",
            retail_price=Decimal("12.00"),
            wholesale_price=Decimal("8.40"),
        )
        retired = Product(
            code="OLD-999",
            name="Retired charm",
            retail_price=Decimal("5.00"),
            wholesale_price=Decimal("3.00"),
            is_active=False,
        )
        session.add_all([bracelet, necklace, earrings, retired])
        await session.commit()

        context: dict[str, object] = {
            "bracelet_id": bracelet.id,
            "necklace_id": necklace.id,
            "earrings_id": earrings.id,
            "retired_id": retired.id,
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
