"""Test fixtures for the hotel rates backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("APP_ENV", "test")

from hotel_rates.core.config import get_settings
from hotel_rates.db.base import Base
from hotel_rates.db.session import dispose_engine, get_sessionmaker
from hotel_rates.main import app
from hotel_rates.models import Customer, Hotel, Room, RoomCategory


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    app.state.multiplier_store = None
    yield
    app.state.multiplier_store = None
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(
    reset_database: None, db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client plus a seeded hotel with one room per category."""
    sessionmaker = get_sessionmaker(db_url)

    async with sessionmaker() as session:
        hotel = Hotel(name="Harbour View", address="1 Quay Street")
        session.add(hotel)
        await session.flush()

        rooms = {
            category: Room(
                hotel_id=hotel.id,
                room_number=f"{index + 1}01",
                category=category,
                is_available=True,
            )
            for index, category in enumerate(RoomCategory)
        }
        session.add_all(rooms.values())

        customer = Customer(
            first_name="Robin",
            last_name="Guest",
            email="robin@example.com",
        )
        session.add(customer)
        await session.commit()

        context: dict[str, object] = {
            "hotel_id": hotel.id,
            "room_ids": {category: room.id for category, room in rooms.items()},
            "customer_id": customer.id,
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
