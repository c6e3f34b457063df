"""API tests for room listing."""

from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient

from hotel_rates.db.session import get_sessionmaker
from hotel_rates.models import Room, RoomCategory

pytestmark = pytest.mark.asyncio


async def test_available_rooms_filter(
    app_context: dict[str, object], db_url: str
) -> None:
    client: AsyncClient = app_context["client"]
    room_ids = app_context["room_ids"]

    async with get_sessionmaker(db_url)() as session:
        suite = await session.get(Room, room_ids[RoomCategory.SUITE])
        suite.is_available = False
        await session.commit()

    everything = (await client.get("/api/v1/rooms")).json()
    assert [item["room_number"] for item in everything] == ["101", "201", "301"]

    available = (await client.get("/api/v1/rooms", params={"available": "true"})).json()
    assert [item["category"] for item in available] == ["single", "double"]

    doubles = await client.get(
        "/api/v1/rooms", params={"available": "true", "category": "double"}
    )
    assert [item["id"] for item in doubles.json()] == [str(room_ids[RoomCategory.DOUBLE])]

    suites = await client.get(
        "/api/v1/rooms", params={"available": "true", "category": "suite"}
    )
    assert suites.json() == []

    by_hotel = await client.get(
        "/api/v1/rooms", params={"hotel_id": str(app_context["hotel_id"])}
    )
    assert len(by_hotel.json()) == 3


async def test_get_room(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]
    room_id = app_context["room_ids"][RoomCategory.SINGLE]

    response = await client.get(f"/api/v1/rooms/{room_id}")
    assert response.status_code == 200
    assert response.json()["room_number"] == "101"
    assert response.json()["is_available"] is True

    missing = await client.get(f"/api/v1/rooms/{uuid.uuid4()}")
    assert missing.status_code == 404
