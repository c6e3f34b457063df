"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_rates.core.config import get_settings
from hotel_rates.db.session import get_session
from hotel_rates.services.multiplier_store import MultiplierStore
from hotel_rates.services.price_calculator import PriceCalculator
from hotel_rates.services.pricing_store_service import load_multiplier_store
from hotel_rates.services.statistics_service import StatisticsAggregator


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


async def get_multiplier_store(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> MultiplierStore:
    """Return the application's pricing store, loading it on first use."""
    store = getattr(request.app.state, "multiplier_store", None)
    if store is None:
        store = await load_multiplier_store(session)
        request.app.state.multiplier_store = store
    return store


def get_price_calculator(
    store: Annotated[MultiplierStore, Depends(get_multiplier_store)],
) -> PriceCalculator:
    settings = get_settings()
    return PriceCalculator(store, weekend_multiplier=settings.weekend_multiplier)


def get_statistics_aggregator(
    calculator: Annotated[PriceCalculator, Depends(get_price_calculator)],
) -> StatisticsAggregator:
    settings = get_settings()
    return StatisticsAggregator(
        calculator,
        strict=settings.strict_room_references,
        cancellation_lookback_days=settings.cancellation_lookback_days,
    )
