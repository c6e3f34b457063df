"""Persisted pricing configuration: base prices, seasons and events."""

from __future__ import annotations

import datetime
from decimal import Decimal

from sqlalchemy import Date, Enum, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hotel_rates.db.base import Base
from hotel_rates.models.hotel import RoomCategory
from hotel_rates.models.mixins import TimestampMixin


class BasePrice(TimestampMixin, Base):
    """Nightly base price for a room category."""

    __tablename__ = "base_prices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    room_category: Mapped[RoomCategory] = mapped_column(
        Enum(RoomCategory), unique=True, nullable=False
    )
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)


class SeasonalPricing(TimestampMixin, Base):
    """Seasonal multiplier applied to every day of an inclusive date range.

    Rows are replayed in ``id`` order, so a later row wins on shared days.
    """

    __tablename__ = "seasonal_pricing"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    start_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    multiplier: Mapped[Decimal] = mapped_column(Numeric(8, 4), nullable=False)


class EventPricing(TimestampMixin, Base):
    """Named event multiplier for a single day."""

    __tablename__ = "event_pricing"
    __table_args__ = (
        UniqueConstraint("event_date", "event_name", name="uq_event_pricing_day_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    event_name: Mapped[str] = mapped_column(String(120), nullable=False)
    multiplier: Mapped[Decimal] = mapped_column(Numeric(8, 4), nullable=False)
