"""Async engine registry for the price catalogue database."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pos_pricing.core.config import get_settings


@dataclass(slots=True)
class _Database:
    engine: AsyncEngine
    sessionmaker: async_sessionmaker[AsyncSession]


_databases: dict[str, _Database] = {}


def _engine_options(url: str) -> dict[str, Any]:
    # SQLite files are shared between the API and the seed script.
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"timeout": 30}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


def _database(database_url: str | None = None) -> _Database:
    url = database_url or get_settings().database_url
    database = _databases.get(url)
    if database is None:
        engine = create_async_engine(url, **_engine_options(url))
        database = _Database(
            engine=engine,
            sessionmaker=async_sessionmaker(engine, expire_on_commit=False),
        )
        _databases[url] = database
    return database


def get_engine(database_url: str | None = None) -> AsyncEngine:
    return _database(database_url).engine


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Sessionmaker bound to ``database_url`` (the configured URL by default)."""
    return _database(database_url).sessionmaker


async def get_session() -> AsyncIterator[AsyncSession]:
    async with get_sessionmaker()() as session:
        yield session


async def dispose_engine(database_url: str | None = None) -> None:
    """Close the pooled connections for ``database_url`` and forget the engine."""
    url = database_url or get_settings().database_url
    database = _databases.pop(url, None)
    if database is not None:
        await database.engine.dispose()
