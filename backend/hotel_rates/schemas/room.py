"""Room schemas."""
from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict

from hotel_rates.models.hotel import RoomCategory


class RoomRead(BaseModel):
    """Serialized room."""

    id: uuid.UUID
    hotel_id: uuid.UUID | None = None
    room_number: str | None = None
    category: RoomCategory
    is_available: bool

    model_config = ConfigDict(from_attributes=True)
