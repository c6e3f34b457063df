"""Tests for reservation booking, updates and lookups."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

import pytest

from hotel_rates.core.exceptions import InvalidRangeError
from hotel_rates.db.session import get_sessionmaker
from hotel_rates.models import ReservationStatus, RoomCategory
from hotel_rates.services import reservation_service
from hotel_rates.services.multiplier_store import MultiplierStore
from hotel_rates.services.price_calculator import PriceCalculator

pytestmark = pytest.mark.asyncio

MONDAY = datetime.date(2024, 6, 3)


def _calculator() -> PriceCalculator:
    return PriceCalculator(
        MultiplierStore(
            {
                RoomCategory.SINGLE: Decimal("100"),
                RoomCategory.DOUBLE: Decimal("150"),
                RoomCategory.SUITE: Decimal("250"),
            }
        )
    )


async def test_booking_stores_priced_total(
    app_context: dict[str, object], db_url: str
) -> None:
    room_ids = app_context["room_ids"]
    calculator = _calculator()

    async with get_sessionmaker(db_url)() as session:
        reservation = await reservation_service.create_reservation(
            session,
            calculator,
            room_id=room_ids[RoomCategory.SINGLE],
            customer_id=app_context["customer_id"],
            start_date=MONDAY,
            end_date=MONDAY + datetime.timedelta(days=2),
            occupancy_rate=0.6,
        )

    assert reservation.status == ReservationStatus.CONFIRMED
    assert reservation.total_price == Decimal("200.00")
    assert reservation.nights == 2


async def test_booking_derives_occupancy_from_existing_stays(
    app_context: dict[str, object], db_url: str
) -> None:
    room_ids = app_context["room_ids"]
    calculator = _calculator()

    async with get_sessionmaker(db_url)() as session:
        # empty hotel: 0% occupancy earns the 20% discount
        first = await reservation_service.create_reservation(
            session,
            calculator,
            room_id=room_ids[RoomCategory.SUITE],
            start_date=MONDAY,
            end_date=MONDAY + datetime.timedelta(days=1),
        )
        # the suite is now taken: 1 of 3 rooms occupied earns 10%
        second = await reservation_service.create_reservation(
            session,
            calculator,
            room_id=room_ids[RoomCategory.SINGLE],
            start_date=MONDAY,
            end_date=MONDAY + datetime.timedelta(days=1),
        )

    assert first.total_price == Decimal("200.00")
    assert second.total_price == Decimal("90.00")


async def test_booking_rejects_bad_input(
    app_context: dict[str, object], db_url: str
) -> None:
    room_ids = app_context["room_ids"]
    calculator = _calculator()

    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(ValueError, match="Room not found"):
            await reservation_service.create_reservation(
                session,
                calculator,
                room_id=uuid.uuid4(),
                start_date=MONDAY,
                end_date=MONDAY + datetime.timedelta(days=1),
            )
        with pytest.raises(InvalidRangeError):
            await reservation_service.create_reservation(
                session,
                calculator,
                room_id=room_ids[RoomCategory.SINGLE],
                start_date=MONDAY,
                end_date=MONDAY,
            )


async def test_double_booking_is_rejected_but_back_to_back_is_allowed(
    app_context: dict[str, object], db_url: str
) -> None:
    room_id = app_context["room_ids"][RoomCategory.DOUBLE]
    calculator = _calculator()

    async with get_sessionmaker(db_url)() as session:
        await reservation_service.create_reservation(
            session,
            calculator,
            room_id=room_id,
            start_date=MONDAY,
            end_date=MONDAY + datetime.timedelta(days=3),
            occupancy_rate=0.6,
        )
        with pytest.raises(ValueError, match="already booked"):
            await reservation_service.create_reservation(
                session,
                calculator,
                room_id=room_id,
                start_date=MONDAY + datetime.timedelta(days=2),
                end_date=MONDAY + datetime.timedelta(days=4),
                occupancy_rate=0.6,
            )
        follow_on = await reservation_service.create_reservation(
            session,
            calculator,
            room_id=room_id,
            start_date=MONDAY + datetime.timedelta(days=3),
            end_date=MONDAY + datetime.timedelta(days=4),
            occupancy_rate=0.6,
        )

    assert follow_on.total_price == Decimal("150.00")


async def test_update_reprices_and_enforces_status_rules(
    app_context: dict[str, object], db_url: str
) -> None:
    room_ids = app_context["room_ids"]
    calculator = _calculator()

    async with get_sessionmaker(db_url)() as session:
        reservation = await reservation_service.create_reservation(
            session,
            calculator,
            room_id=room_ids[RoomCategory.SINGLE],
            start_date=MONDAY,
            end_date=MONDAY + datetime.timedelta(days=1),
            occupancy_rate=0.6,
        )
        updated = await reservation_service.update_reservation(
            session,
            calculator,
            reservation,
            room_id=room_ids[RoomCategory.DOUBLE],
            end_date=MONDAY + datetime.timedelta(days=2),
        )
        assert updated.room_id == room_ids[RoomCategory.DOUBLE]
        # two nights in an otherwise empty hotel, 20% off 150
        assert updated.total_price == Decimal("240.00")

        cancelled = await reservation_service.update_reservation(
            session, calculator, updated, status=ReservationStatus.CANCELLED
        )
        assert cancelled.status == ReservationStatus.CANCELLED

        with pytest.raises(ValueError, match="Cannot change reservation"):
            await reservation_service.update_reservation(
                session, calculator, cancelled, status=ReservationStatus.CONFIRMED
            )


async def test_cancel_is_idempotent(
    app_context: dict[str, object], db_url: str
) -> None:
    calculator = _calculator()

    async with get_sessionmaker(db_url)() as session:
        reservation = await reservation_service.create_reservation(
            session,
            calculator,
            room_id=app_context["room_ids"][RoomCategory.SUITE],
            start_date=MONDAY,
            end_date=MONDAY + datetime.timedelta(days=1),
            occupancy_rate=0.6,
        )
        first = await reservation_service.cancel_reservation(session, reservation.id)
        second = await reservation_service.cancel_reservation(session, reservation.id)

        assert first.status == ReservationStatus.CANCELLED
        assert second.status == ReservationStatus.CANCELLED
        assert second.total_price == Decimal("250.00")

        with pytest.raises(ValueError, match="Reservation not found"):
            await reservation_service.cancel_reservation(session, uuid.uuid4())


async def test_lookups(app_context: dict[str, object], db_url: str) -> None:
    room_ids = app_context["room_ids"]
    customer_id = app_context["customer_id"]
    calculator = _calculator()

    async with get_sessionmaker(db_url)() as session:
        inside = await reservation_service.create_reservation(
            session,
            calculator,
            room_id=room_ids[RoomCategory.SINGLE],
            customer_id=customer_id,
            start_date=datetime.date(2024, 6, 5),
            end_date=datetime.date(2024, 6, 7),
            occupancy_rate=0.6,
        )
        straddling = await reservation_service.create_reservation(
            session,
            calculator,
            room_id=room_ids[RoomCategory.DOUBLE],
            start_date=datetime.date(2024, 6, 8),
            end_date=datetime.date(2024, 6, 15),
            occupancy_rate=0.6,
        )
        await reservation_service.cancel_reservation(session, straddling.id)

        window = (datetime.date(2024, 6, 1), datetime.date(2024, 6, 10))
        contained = await reservation_service.find_by_date_range(session, *window)
        overlapping = await reservation_service.find_overlapping(session, *window)
        confirmed = await reservation_service.find_overlapping(
            session, *window, status=ReservationStatus.CONFIRMED
        )
        cancelled = await reservation_service.find_by_status(
            session, ReservationStatus.CANCELLED
        )
        by_room = await reservation_service.find_by_room_id(
            session, room_ids[RoomCategory.DOUBLE]
        )
        by_customer = await reservation_service.find_by_customer_id(session, customer_id)
        everything = await reservation_service.find_all(session)

    assert [item.id for item in contained] == [inside.id]
    assert [item.id for item in overlapping] == [inside.id, straddling.id]
    assert [item.id for item in confirmed] == [inside.id]
    assert [item.id for item in cancelled] == [straddling.id]
    assert [item.id for item in by_room] == [straddling.id]
    assert [item.id for item in by_customer] == [inside.id]
    assert len(everything) == 2
