"""API tests for reservation endpoints."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any

import pytest
from httpx import AsyncClient

from hotel_rates.models import RoomCategory

pytestmark = pytest.mark.asyncio


async def _book(
    client: AsyncClient,
    room_id: uuid.UUID,
    start_date: str,
    end_date: str,
    **extra: Any,
) -> dict[str, Any]:
    response = await client.post(
        "/api/v1/reservations",
        json={
            "room_id": str(room_id),
            "start_date": start_date,
            "end_date": end_date,
            **extra,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_reservation_lifecycle(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]
    room_ids = app_context["room_ids"]

    reservation = await _book(
        client,
        room_ids[RoomCategory.SINGLE],
        "2024-06-03",
        "2024-06-05",
        customer_id=str(app_context["customer_id"]),
        occupancy_rate=0.6,
    )
    assert reservation["status"] == "confirmed"
    assert Decimal(reservation["total_price"]) == Decimal("200.00")

    detail = await client.get(f"/api/v1/reservations/{reservation['id']}")
    assert detail.status_code == 200
    assert detail.json()["customer_id"] == str(app_context["customer_id"])

    response = await client.patch(
        f"/api/v1/reservations/{reservation['id']}",
        json={"end_date": "2024-06-06"},
    )
    assert response.status_code == 200
    # three weekday nights in an otherwise empty hotel, 20% off
    assert Decimal(response.json()["total_price"]) == Decimal("240.00")

    response = await client.post(f"/api/v1/reservations/{reservation['id']}/cancel")
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"

    response = await client.post(f"/api/v1/reservations/{reservation['id']}/cancel")
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"

    response = await client.patch(
        f"/api/v1/reservations/{reservation['id']}", json={"status": "confirmed"}
    )
    assert response.status_code == 400

    response = await client.delete(f"/api/v1/reservations/{reservation['id']}")
    assert response.status_code == 204
    response = await client.get(f"/api/v1/reservations/{reservation['id']}")
    assert response.status_code == 404


async def test_booking_validation(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]
    room_id = app_context["room_ids"][RoomCategory.DOUBLE]

    await _book(client, room_id, "2024-06-03", "2024-06-06")

    conflict = await client.post(
        "/api/v1/reservations",
        json={"room_id": str(room_id), "start_date": "2024-06-05", "end_date": "2024-06-07"},
    )
    assert conflict.status_code == 400
    assert "already booked" in conflict.json()["detail"]

    empty = await client.post(
        "/api/v1/reservations",
        json={"room_id": str(room_id), "start_date": "2024-06-10", "end_date": "2024-06-10"},
    )
    assert empty.status_code == 400

    missing = await client.post(
        "/api/v1/reservations",
        json={"room_id": str(uuid.uuid4()), "start_date": "2024-06-10", "end_date": "2024-06-11"},
    )
    assert missing.status_code == 400
    assert "Room not found" in missing.json()["detail"]

    response = await client.post(f"/api/v1/reservations/{uuid.uuid4()}/cancel")
    assert response.status_code == 404


async def test_list_filters(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]
    room_ids = app_context["room_ids"]
    customer_id = str(app_context["customer_id"])

    inside = await _book(
        client,
        room_ids[RoomCategory.SINGLE],
        "2024-06-05",
        "2024-06-07",
        customer_id=customer_id,
    )
    straddling = await _book(client, room_ids[RoomCategory.SUITE], "2024-06-08", "2024-06-15")
    await client.post(f"/api/v1/reservations/{straddling['id']}/cancel")

    everything = (await client.get("/api/v1/reservations")).json()
    assert [item["id"] for item in everything] == [inside["id"], straddling["id"]]

    contained = await client.get(
        "/api/v1/reservations",
        params={"start_date": "2024-06-01", "end_date": "2024-06-10"},
    )
    assert [item["id"] for item in contained.json()] == [inside["id"]]

    cancelled = await client.get("/api/v1/reservations", params={"status": "cancelled"})
    assert [item["id"] for item in cancelled.json()] == [straddling["id"]]

    by_room = await client.get(
        "/api/v1/reservations",
        params={"room_id": str(room_ids[RoomCategory.SUITE]), "status": "confirmed"},
    )
    assert by_room.json() == []

    by_customer = await client.get(
        "/api/v1/reservations", params={"customer_id": customer_id}
    )
    assert [item["id"] for item in by_customer.json()] == [inside["id"]]

    half_window = await client.get(
        "/api/v1/reservations", params={"start_date": "2024-06-01"}
    )
    assert half_window.status_code == 400
