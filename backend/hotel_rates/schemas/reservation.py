"""Pydantic schemas for reservations."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from hotel_rates.models.reservation import ReservationStatus


class ReservationCreate(BaseModel):
    """Payload for booking a room."""

    room_id: uuid.UUID
    customer_id: uuid.UUID | None = None
    start_date: date
    end_date: date
    occupancy_rate: float | None = Field(default=None, ge=0.0, le=1.0)


class ReservationUpdate(BaseModel):
    """Mutable reservation fields."""

    room_id: uuid.UUID | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: ReservationStatus | None = None


class ReservationRead(BaseModel):
    """Serialized reservation representation."""

    id: uuid.UUID
    room_id: uuid.UUID
    customer_id: uuid.UUID | None = None
    start_date: date
    end_date: date
    status: ReservationStatus
    total_price: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
