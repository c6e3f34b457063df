"""API tests for pricing endpoints."""

from __future__ import annotations

from decimal import Decimal

import pytest
from httpx import AsyncClient

from hotel_rates.db.session import get_sessionmaker
from hotel_rates.models import RoomCategory
from hotel_rates.services import pricing_store_service

pytestmark = pytest.mark.asyncio


async def test_base_prices_default_and_update(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]

    response = await client.get("/api/v1/pricing/base-prices")
    assert response.status_code == 200
    prices = {item["category"]: Decimal(item["price"]) for item in response.json()}
    assert prices == {
        "single": Decimal("100"),
        "double": Decimal("150"),
        "suite": Decimal("250"),
    }

    response = await client.put(
        "/api/v1/pricing/base-prices/suite", json={"price": "275.00"}
    )
    assert response.status_code == 200
    assert Decimal(response.json()["price"]) == Decimal("275")

    response = await client.put(
        "/api/v1/pricing/base-prices/suite", json={"price": "-1"}
    )
    assert response.status_code == 422

    response = await client.put(
        "/api/v1/pricing/base-prices/penthouse", json={"price": "500"}
    )
    assert response.status_code == 422


async def test_seasonal_pricing_is_grouped(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]

    response = await client.post(
        "/api/v1/pricing/seasonal",
        json={"start_date": "2024-12-20", "end_date": "2024-12-31", "multiplier": "2.0"},
    )
    assert response.status_code == 201
    response = await client.post(
        "/api/v1/pricing/seasonal",
        json={"start_date": "2024-12-24", "end_date": "2024-12-25", "multiplier": "2.5"},
    )
    assert response.status_code == 201

    ranges = (await client.get("/api/v1/pricing/seasonal")).json()
    assert [item["label"] for item in ranges] == [
        "2024-12-20 to 2024-12-23",
        "2024-12-24 to 2024-12-25",
        "2024-12-26 to 2024-12-31",
    ]
    assert [Decimal(item["multiplier"]) for item in ranges] == [
        Decimal("2.0"),
        Decimal("2.5"),
        Decimal("2.0"),
    ]

    response = await client.post(
        "/api/v1/pricing/seasonal",
        json={"start_date": "2024-12-31", "end_date": "2024-12-20", "multiplier": "2.0"},
    )
    assert response.status_code == 400

    response = await client.delete("/api/v1/pricing/seasonal")
    assert response.status_code == 204
    assert (await client.get("/api/v1/pricing/seasonal")).json() == []


async def test_event_pricing_reports_applied_multiplier(
    app_context: dict[str, object],
) -> None:
    client: AsyncClient = app_context["client"]

    for name, factor in (("Fireworks", "1.8"), ("Gala", "2.2")):
        response = await client.post(
            "/api/v1/pricing/events",
            json={"event_date": "2024-12-31", "event_name": name, "multiplier": factor},
        )
        assert response.status_code == 201

    events = (await client.get("/api/v1/pricing/events")).json()
    assert len(events) == 1
    assert events[0]["event_date"] == "2024-12-31"
    assert set(events[0]["events"]) == {"Fireworks", "Gala"}
    assert Decimal(events[0]["applied_multiplier"]) == Decimal("2.2")

    response = await client.post(
        "/api/v1/pricing/events",
        json={"event_date": "2024-12-31", "event_name": "   ", "multiplier": "1.5"},
    )
    assert response.status_code == 400

    response = await client.delete("/api/v1/pricing/events")
    assert response.status_code == 204
    assert (await client.get("/api/v1/pricing/events")).json() == []


async def test_quote_uses_highest_date_factor(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]
    await client.post(
        "/api/v1/pricing/seasonal",
        json={"start_date": "2024-12-20", "end_date": "2024-12-31", "multiplier": "2.0"},
    )
    await client.post(
        "/api/v1/pricing/events",
        json={"event_date": "2024-12-31", "event_name": "NewYear", "multiplier": "3.0"},
    )

    response = await client.post(
        "/api/v1/pricing/quote",
        json={
            "category": "single",
            "start_date": "2024-12-31",
            "end_date": "2025-01-01",
            "occupancy_rate": 0.6,
        },
    )
    assert response.status_code == 200
    quote = response.json()
    assert Decimal(quote["total"]) == Decimal("300")
    assert len(quote["nights"]) == 1
    assert Decimal(quote["nights"][0]["date_multiplier"]) == Decimal("3.0")


async def test_quote_defaults_to_current_occupancy(
    app_context: dict[str, object],
) -> None:
    client: AsyncClient = app_context["client"]

    # 2024-06-01 is a Saturday; an empty hotel gets the 20% discount
    response = await client.post(
        "/api/v1/pricing/quote",
        json={"category": "double", "start_date": "2024-06-01", "end_date": "2024-06-03"},
    )
    assert response.status_code == 200
    quote = response.json()
    assert quote["occupancy_rate"] == 0.0
    assert Decimal(quote["total"]) == Decimal("360")
    assert [night["weekend"] for night in quote["nights"]] == [True, True]


async def test_quote_rejects_empty_stay(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]

    response = await client.post(
        "/api/v1/pricing/quote",
        json={"category": "single", "start_date": "2024-06-03", "end_date": "2024-06-03"},
    )
    assert response.status_code == 400

    response = await client.post(
        "/api/v1/pricing/quote",
        json={
            "category": "single",
            "start_date": "2024-06-03",
            "end_date": "2024-06-04",
            "occupancy_rate": 1.5,
        },
    )
    assert response.status_code == 422


async def test_store_loads_persisted_rows(
    app_context: dict[str, object], db_url: str
) -> None:
    client: AsyncClient = app_context["client"]

    async with get_sessionmaker(db_url)() as session:
        store = await pricing_store_service.load_multiplier_store(session)
        await pricing_store_service.update_base_price(
            session, store, category=RoomCategory.SINGLE, price=Decimal("120")
        )

    response = await client.post(
        "/api/v1/pricing/quote",
        json={
            "category": "single",
            "start_date": "2024-06-03",
            "end_date": "2024-06-04",
            "occupancy_rate": 0.9,
        },
    )
    assert Decimal(response.json()["total"]) == Decimal("120")
