"""Room lookups used by pricing, booking and statistics."""
from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_rates.models.hotel import Room, RoomCategory


async def find_all(
    session: AsyncSession,
    *,
    hotel_id: uuid.UUID | None = None,
) -> Sequence[Room]:
    """Return every room, optionally limited to one hotel."""
    stmt = select(Room).order_by(Room.room_number, Room.id)
    if hotel_id is not None:
        stmt = stmt.where(Room.hotel_id == hotel_id)
    result = await session.execute(stmt)
    return result.scalars().all()


async def find_by_id(session: AsyncSession, room_id: uuid.UUID) -> Room | None:
    return await session.get(Room, room_id)


async def find_available(
    session: AsyncSession,
    *,
    category: RoomCategory | None = None,
) -> Sequence[Room]:
    stmt = select(Room).where(Room.is_available.is_(True))
    if category is not None:
        stmt = stmt.where(Room.category == category)
    result = await session.execute(stmt.order_by(Room.room_number, Room.id))
    return result.scalars().all()
