"""Room listing endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_rates.api import deps
from hotel_rates.models.hotel import RoomCategory
from hotel_rates.schemas.room import RoomRead
from hotel_rates.services import room_service

router = APIRouter()

SessionDep = Annotated[AsyncSession, Depends(deps.get_db_session)]


@router.get("", response_model=list[RoomRead], summary="List rooms")
async def list_rooms(
    session: SessionDep,
    available: bool = Query(default=False),
    category: RoomCategory | None = Query(default=None),
    hotel_id: uuid.UUID | None = Query(default=None),
) -> list[RoomRead]:
    """List rooms; ``available=true`` limits the result to bookable rooms."""
    if available:
        rooms = await room_service.find_available(session, category=category)
    else:
        rooms = await room_service.find_all(session)
    return [
        RoomRead.model_validate(room)
        for room in rooms
        if (category is None or room.category == category)
        and (hotel_id is None or room.hotel_id == hotel_id)
    ]


@router.get("/{room_id}", response_model=RoomRead, summary="Get room")
async def get_room(room_id: uuid.UUID, session: SessionDep) -> RoomRead:
    room = await room_service.find_by_id(session, room_id)
    if room is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return RoomRead.model_validate(room)
