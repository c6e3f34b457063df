"""Pricing schema definitions."""

from __future__ import annotations

import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from hotel_rates.models.hotel import RoomCategory


class BasePriceRead(BaseModel):
    """Current base price of a room category."""

    category: RoomCategory
    price: Decimal


class BasePriceUpdate(BaseModel):
    """New base price for a category."""

    price: Decimal = Field(ge=Decimal("0"))


class SeasonalPricingCreate(BaseModel):
    """Seasonal multiplier applied to an inclusive date range."""

    start_date: datetime.date
    end_date: datetime.date
    multiplier: Decimal = Field(gt=Decimal("0"))


class SeasonalRangeRead(BaseModel):
    """A run of consecutive days sharing one seasonal multiplier."""

    start_date: datetime.date
    end_date: datetime.date
    multiplier: Decimal
    label: str


class EventPricingCreate(BaseModel):
    """Named event multiplier for one day."""

    event_date: datetime.date
    event_name: str = Field(min_length=1, max_length=120)
    multiplier: Decimal = Field(gt=Decimal("0"))


class EventDayRead(BaseModel):
    """All named events of a day and the factor that applies."""

    event_date: datetime.date
    events: dict[str, Decimal]
    applied_multiplier: Decimal


class QuoteRequest(BaseModel):
    """Input payload for pricing a prospective stay."""

    category: RoomCategory
    start_date: datetime.date
    end_date: datetime.date
    occupancy_rate: float | None = Field(default=None, ge=0.0, le=1.0)


class NightPriceRead(BaseModel):
    """Single night within a quote."""

    date: datetime.date
    weekend: bool
    date_multiplier: Decimal
    discount: Decimal
    amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class QuoteRead(BaseModel):
    """Per-night breakdown and total for a stay."""

    category: RoomCategory
    start_date: datetime.date
    end_date: datetime.date
    occupancy_rate: float
    base_price: Decimal
    nights: list[NightPriceRead]
    total: Decimal

    model_config = ConfigDict(from_attributes=True)
