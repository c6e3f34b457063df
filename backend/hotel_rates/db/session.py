"""Async engine and session helpers for the rates database."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hotel_rates.core.config import get_settings
from hotel_rates.db.base import Base

logger = logging.getLogger(__name__)

_engines: dict[str, AsyncEngine] = {}
_sessionmakers: dict[str, async_sessionmaker[AsyncSession]] = {}


def _database_url(override: str | None = None) -> str:
    return override or get_settings().database_url


def get_engine(database_url: str | None = None) -> AsyncEngine:
    """Return the engine bound to ``database_url``, creating it on first use."""
    url = _database_url(database_url)
    engine = _engines.get(url)
    if engine is None:
        connect_args: dict[str, object] = {}
        if make_url(url).get_backend_name() == "sqlite":
            connect_args["check_same_thread"] = False
        engine = create_async_engine(url, future=True, connect_args=connect_args)
        _engines[url] = engine
    return engine


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Return (and cache) the session factory for a database URL."""
    url = _database_url(database_url)
    factory = _sessionmakers.get(url)
    if factory is None:
        factory = async_sessionmaker(
            get_engine(url), expire_on_commit=False, class_=AsyncSession
        )
        _sessionmakers[url] = factory
    return factory


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a session from the configured database."""
    async with get_sessionmaker()() as session:
        yield session


async def create_schema(database_url: str | None = None) -> None:
    """Create any missing tables; used for local runs without Alembic."""
    import hotel_rates.models  # noqa: F401  registers mappers on Base.metadata

    engine = get_engine(database_url)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("Ensured schema for %s", engine.url.render_as_string())


async def dispose_engine(database_url: str | None = None) -> None:
    """Dispose the cached engine and session factory for a database URL."""
    url = _database_url(database_url)
    _sessionmakers.pop(url, None)
    engine = _engines.pop(url, None)
    if engine is not None:
        await engine.dispose()
