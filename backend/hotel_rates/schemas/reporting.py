"""Reporting schemas."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from hotel_rates.models.hotel import RoomCategory


class CategoryStatisticsRead(BaseModel):
    """Window figures for a single room category."""

    category: RoomCategory
    room_count: int
    occupied_room_days: int
    available_room_days: int
    occupancy_rate: float
    revenue: Decimal
    cancellations: int

    model_config = ConfigDict(from_attributes=True)


class StatisticsSummaryRead(BaseModel):
    """Occupancy, revenue and cancellations for a date window."""

    start_date: date
    end_date: date
    room_count: int
    occupied_room_days: int
    available_room_days: int
    occupancy_rate: float
    revenue: Decimal
    cancellations: int
    categories: list[CategoryStatisticsRead]

    model_config = ConfigDict(from_attributes=True)
