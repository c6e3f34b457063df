"""Persistence for the pricing tables backing a :class:`MultiplierStore`."""

from __future__ import annotations

import asyncio
import datetime
import logging
import weakref
from collections.abc import Mapping
from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_rates.core.config import get_settings
from hotel_rates.models.hotel import RoomCategory
from hotel_rates.models.pricing import BasePrice, EventPricing, SeasonalPricing
from hotel_rates.services.multiplier_store import (
    MultiplierStore,
    validate_event_name,
    validate_factor,
    validate_price,
    validate_range,
)

logger = logging.getLogger(__name__)

# writes to one store are applied in the order their rows are committed
_write_locks: weakref.WeakKeyDictionary[MultiplierStore, asyncio.Lock] = (
    weakref.WeakKeyDictionary()
)


def _write_lock(store: MultiplierStore) -> asyncio.Lock:
    lock = _write_locks.get(store)
    if lock is None:
        lock = _write_locks[store] = asyncio.Lock()
    return lock


def default_base_prices() -> dict[RoomCategory, Decimal]:
    settings = get_settings()
    return {
        RoomCategory(category): Decimal(price)
        for category, price in settings.default_base_prices.items()
    }


async def load_multiplier_store(
    session: AsyncSession,
    *,
    fallback_base_prices: Mapping[RoomCategory, Decimal] | None = None,
) -> MultiplierStore:
    """Build a store from the persisted pricing rows.

    Seasonal rows are replayed in insertion order. When no base price rows
    exist the configured defaults are used in memory.
    """
    store = MultiplierStore()

    base_rows = (await session.execute(select(BasePrice))).scalars().all()
    for row in base_rows:
        store.update_base_price(row.room_category, row.price)
    if not base_rows:
        fallback = (
            fallback_base_prices
            if fallback_base_prices is not None
            else default_base_prices()
        )
        for category, price in fallback.items():
            store.update_base_price(category, price)

    seasonal_rows = (
        await session.execute(select(SeasonalPricing).order_by(SeasonalPricing.id))
    ).scalars()
    seasonal_count = 0
    for row in seasonal_rows:
        store.set_seasonal_multiplier(row.start_date, row.end_date, row.multiplier)
        seasonal_count += 1

    event_rows = (
        await session.execute(select(EventPricing).order_by(EventPricing.id))
    ).scalars()
    event_count = 0
    for row in event_rows:
        store.set_event_pricing(row.event_date, row.event_name, row.multiplier)
        event_count += 1

    logger.info(
        "Loaded pricing store: %s base prices, %s seasonal rows, %s event rows",
        len(base_rows),
        seasonal_count,
        event_count,
    )
    return store


async def update_base_price(
    session: AsyncSession,
    store: MultiplierStore,
    *,
    category: RoomCategory,
    price: Decimal,
) -> Decimal:
    """Persist a new base price, then apply it to the store."""
    amount = validate_price(price)
    async with _write_lock(store):
        result = await session.execute(
            select(BasePrice).where(BasePrice.room_category == category)
        )
        row = result.scalar_one_or_none()
        if row is None:
            session.add(BasePrice(room_category=category, price=amount))
        else:
            row.price = amount
        await _commit(session)
        store.update_base_price(category, amount)
    logger.info("Base price for %s set to %s", category.value, amount)
    return amount


async def add_seasonal_multiplier(
    session: AsyncSession,
    store: MultiplierStore,
    *,
    start_date: datetime.date,
    end_date: datetime.date,
    multiplier: Decimal,
) -> SeasonalPricing:
    """Persist a seasonal range, then apply it to the store.

    Rows replay in ``id`` order on load, so the insert and the in-memory write
    happen under the store's write lock.
    """
    validate_range(start_date, end_date)
    factor = validate_factor(multiplier)
    row = SeasonalPricing(start_date=start_date, end_date=end_date, multiplier=factor)
    async with _write_lock(store):
        session.add(row)
        await _commit(session)
        store.set_seasonal_multiplier(start_date, end_date, factor)
    await session.refresh(row)
    logger.info(
        "Seasonal multiplier %s set for %s to %s", factor, start_date, end_date
    )
    return row


async def set_event_pricing(
    session: AsyncSession,
    store: MultiplierStore,
    *,
    event_date: datetime.date,
    event_name: str,
    multiplier: Decimal,
) -> EventPricing:
    """Insert or overwrite a named event for a day, then apply it to the store."""
    name = validate_event_name(event_name)
    factor = validate_factor(multiplier)
    async with _write_lock(store):
        result = await session.execute(
            select(EventPricing).where(
                EventPricing.event_date == event_date,
                EventPricing.event_name == name,
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            row = EventPricing(event_date=event_date, event_name=name, multiplier=factor)
            session.add(row)
        else:
            row.multiplier = factor
        await _commit(session)
        store.set_event_pricing(event_date, name, factor)
    await session.refresh(row)
    logger.info("Event %r on %s priced at %s", name, event_date, factor)
    return row


async def clear_seasonal_pricing(
    session: AsyncSession, store: MultiplierStore
) -> None:
    async with _write_lock(store):
        await session.execute(delete(SeasonalPricing))
        await _commit(session)
        store.clear_seasonal_pricing()
    logger.info("Seasonal pricing cleared")


async def clear_event_pricing(session: AsyncSession, store: MultiplierStore) -> None:
    async with _write_lock(store):
        await session.execute(delete(EventPricing))
        await _commit(session)
        store.clear_event_pricing()
    logger.info("Event pricing cleared")


async def _commit(session: AsyncSession) -> None:
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
