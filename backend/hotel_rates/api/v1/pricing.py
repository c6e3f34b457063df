"""Pricing administration and quote endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_rates.api import deps
from hotel_rates.models.hotel import RoomCategory
from hotel_rates.schemas.pricing import (
    BasePriceRead,
    BasePriceUpdate,
    EventDayRead,
    EventPricingCreate,
    QuoteRead,
    QuoteRequest,
    SeasonalPricingCreate,
    SeasonalRangeRead,
)
from hotel_rates.services import pricing_store_service, reservation_service
from hotel_rates.services.multiplier_store import MultiplierStore
from hotel_rates.services.price_calculator import PriceCalculator

router = APIRouter(prefix="/pricing", tags=["pricing"])

SessionDep = Annotated[AsyncSession, Depends(deps.get_db_session)]
StoreDep = Annotated[MultiplierStore, Depends(deps.get_multiplier_store)]


def _seasonal_ranges(store: MultiplierStore) -> list[SeasonalRangeRead]:
    return [
        SeasonalRangeRead(
            start_date=group.start_date,
            end_date=group.end_date,
            multiplier=factor,
            label=str(group),
        )
        for group, factor in store.grouped_seasonal_ranges()
    ]


def _event_days(store: MultiplierStore) -> list[EventDayRead]:
    return [
        EventDayRead(
            event_date=day,
            events=events,
            applied_multiplier=store.event_multiplier_on(day),
        )
        for day, events in store.event_pricing_info()
    ]


@router.get(
    "/base-prices", response_model=list[BasePriceRead], summary="List base prices"
)
async def list_base_prices(store: StoreDep) -> list[BasePriceRead]:
    return [
        BasePriceRead(category=category, price=store.get_base_price(category))
        for category in RoomCategory
    ]


@router.put(
    "/base-prices/{category}",
    response_model=BasePriceRead,
    summary="Update a category base price",
)
async def update_base_price(
    category: RoomCategory,
    payload: BasePriceUpdate,
    session: SessionDep,
    store: StoreDep,
) -> BasePriceRead:
    try:
        price = await pricing_store_service.update_base_price(
            session, store, category=category, price=payload.price
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return BasePriceRead(category=category, price=price)


@router.get(
    "/seasonal",
    response_model=list[SeasonalRangeRead],
    summary="Seasonal multipliers grouped into date ranges",
)
async def list_seasonal_pricing(store: StoreDep) -> list[SeasonalRangeRead]:
    return _seasonal_ranges(store)


@router.post(
    "/seasonal",
    response_model=list[SeasonalRangeRead],
    status_code=status.HTTP_201_CREATED,
    summary="Set a seasonal multiplier for a date range",
)
async def create_seasonal_pricing(
    payload: SeasonalPricingCreate,
    session: SessionDep,
    store: StoreDep,
) -> list[SeasonalRangeRead]:
    try:
        await pricing_store_service.add_seasonal_multiplier(
            session,
            store,
            start_date=payload.start_date,
            end_date=payload.end_date,
            multiplier=payload.multiplier,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return _seasonal_ranges(store)


@router.delete(
    "/seasonal",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove all seasonal multipliers",
)
async def clear_seasonal_pricing(session: SessionDep, store: StoreDep) -> Response:
    await pricing_store_service.clear_seasonal_pricing(session, store)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/events", response_model=list[EventDayRead], summary="List event pricing"
)
async def list_event_pricing(store: StoreDep) -> list[EventDayRead]:
    return _event_days(store)


@router.post(
    "/events",
    response_model=list[EventDayRead],
    status_code=status.HTTP_201_CREATED,
    summary="Set a named event multiplier for a day",
)
async def create_event_pricing(
    payload: EventPricingCreate,
    session: SessionDep,
    store: StoreDep,
) -> list[EventDayRead]:
    try:
        await pricing_store_service.set_event_pricing(
            session,
            store,
            event_date=payload.event_date,
            event_name=payload.event_name,
            multiplier=payload.multiplier,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return _event_days(store)


@router.delete(
    "/events",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove all event multipliers",
)
async def clear_event_pricing(session: SessionDep, store: StoreDep) -> Response:
    await pricing_store_service.clear_event_pricing(session, store)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/quote", response_model=QuoteRead, summary="Quote a prospective stay")
async def quote_stay(
    payload: QuoteRequest,
    session: SessionDep,
    calculator: Annotated[PriceCalculator, Depends(deps.get_price_calculator)],
) -> QuoteRead:
    if payload.end_date <= payload.start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must be after start_date",
        )
    occupancy_rate = payload.occupancy_rate
    if occupancy_rate is None:
        occupancy_rate = await reservation_service.booking_occupancy_rate(
            session,
            calculator,
            start_date=payload.start_date,
            end_date=payload.end_date,
        )
    quote = calculator.quote(
        payload.start_date, payload.end_date, payload.category, occupancy_rate
    )
    return QuoteRead.model_validate(quote)
