"""Reservation lookups and booking lifecycle."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import date, timedelta

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_rates.core.exceptions import InvalidRangeError
from hotel_rates.models.hotel import Room
from hotel_rates.models.reservation import Reservation, ReservationStatus
from hotel_rates.services import room_service
from hotel_rates.services.price_calculator import PriceCalculator, to_money
from hotel_rates.services.statistics_service import StatisticsAggregator

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[ReservationStatus, set[ReservationStatus]] = {
    ReservationStatus.CONFIRMED: {ReservationStatus.CANCELLED},
    ReservationStatus.CANCELLED: set(),
}


def _base_query() -> Select[tuple[Reservation]]:
    return select(Reservation).order_by(Reservation.start_date, Reservation.id)


async def find_all(session: AsyncSession) -> Sequence[Reservation]:
    result = await session.execute(_base_query())
    return result.scalars().all()


async def find_by_id(
    session: AsyncSession, reservation_id: uuid.UUID
) -> Reservation | None:
    return await session.get(Reservation, reservation_id)


async def find_by_date_range(
    session: AsyncSession, start_date: date, end_date: date
) -> Sequence[Reservation]:
    """Return reservations lying entirely inside ``[start_date, end_date]``."""
    stmt = _base_query().where(
        Reservation.start_date >= start_date, Reservation.end_date <= end_date
    )
    result = await session.execute(stmt)
    return result.scalars().all()


async def find_overlapping(
    session: AsyncSession,
    start_date: date,
    end_date: date,
    *,
    status: ReservationStatus | None = None,
) -> Sequence[Reservation]:
    """Return reservations whose span touches ``[start_date, end_date]``."""
    stmt = _base_query().where(
        Reservation.end_date >= start_date, Reservation.start_date <= end_date
    )
    if status is not None:
        stmt = stmt.where(Reservation.status == status)
    result = await session.execute(stmt)
    return result.scalars().all()


async def find_by_status(
    session: AsyncSession, status: ReservationStatus
) -> Sequence[Reservation]:
    result = await session.execute(_base_query().where(Reservation.status == status))
    return result.scalars().all()


async def find_by_room_id(
    session: AsyncSession, room_id: uuid.UUID
) -> Sequence[Reservation]:
    result = await session.execute(_base_query().where(Reservation.room_id == room_id))
    return result.scalars().all()


async def find_by_customer_id(
    session: AsyncSession, customer_id: uuid.UUID
) -> Sequence[Reservation]:
    result = await session.execute(
        _base_query().where(Reservation.customer_id == customer_id)
    )
    return result.scalars().all()


async def booking_occupancy_rate(
    session: AsyncSession,
    calculator: PriceCalculator,
    *,
    start_date: date,
    end_date: date,
    exclude_id: uuid.UUID | None = None,
) -> float:
    """Occupancy over the nights of a prospective stay, from current bookings."""
    last_night = end_date - timedelta(days=1)
    rooms = await room_service.find_all(session)
    reservations = [
        reservation
        for reservation in await find_overlapping(
            session, start_date, last_night, status=ReservationStatus.CONFIRMED
        )
        if reservation.id != exclude_id
    ]
    aggregator = StatisticsAggregator(calculator)
    return aggregator.occupancy_rate(rooms, reservations, start_date, last_night)


async def create_reservation(
    session: AsyncSession,
    calculator: PriceCalculator,
    *,
    room_id: uuid.UUID,
    start_date: date,
    end_date: date,
    customer_id: uuid.UUID | None = None,
    occupancy_rate: float | None = None,
) -> Reservation:
    """Book a room and store the price computed for the stay."""
    room = await _require_room(session, room_id)
    _validate_stay(start_date, end_date)
    await _ensure_room_free(session, room_id, start_date, end_date)

    if occupancy_rate is None:
        occupancy_rate = await booking_occupancy_rate(
            session, calculator, start_date=start_date, end_date=end_date
        )
    total = calculator.stay_price(start_date, end_date, room.category, occupancy_rate)

    reservation = Reservation(
        room_id=room.id,
        customer_id=customer_id,
        start_date=start_date,
        end_date=end_date,
        status=ReservationStatus.CONFIRMED,
        total_price=to_money(total),
    )
    session.add(reservation)
    await _commit(session)
    await session.refresh(reservation)
    logger.info(
        "Reservation %s booked for room %s (%s to %s): %s",
        reservation.id,
        room.id,
        start_date,
        end_date,
        reservation.total_price,
    )
    return reservation


async def update_reservation(
    session: AsyncSession,
    calculator: PriceCalculator,
    reservation: Reservation,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
    room_id: uuid.UUID | None = None,
    status: ReservationStatus | None = None,
) -> Reservation:
    """Change dates, room or status; a date or room change re-prices the stay."""
    new_start = start_date or reservation.start_date
    new_end = end_date or reservation.end_date
    new_room_id = room_id or reservation.room_id
    span_changed = (
        new_start != reservation.start_date
        or new_end != reservation.end_date
        or new_room_id != reservation.room_id
    )

    if status is not None and status != reservation.status:
        allowed = _ALLOWED_STATUS_TRANSITIONS[reservation.status]
        if status not in allowed:
            raise ValueError(
                f"Cannot change reservation from {reservation.status.value} to {status.value}"
            )

    if span_changed:
        room = await _require_room(session, new_room_id)
        _validate_stay(new_start, new_end)
        await _ensure_room_free(
            session, new_room_id, new_start, new_end, ignore_id=reservation.id
        )
        occupancy_rate = await booking_occupancy_rate(
            session,
            calculator,
            start_date=new_start,
            end_date=new_end,
            exclude_id=reservation.id,
        )
        reservation.start_date = new_start
        reservation.end_date = new_end
        reservation.room_id = room.id
        reservation.total_price = to_money(
            calculator.stay_price(new_start, new_end, room.category, occupancy_rate)
        )

    if status is not None:
        reservation.status = status

    await _commit(session)
    await session.refresh(reservation)
    return reservation


async def cancel_reservation(
    session: AsyncSession, reservation_id: uuid.UUID
) -> Reservation:
    """Mark a reservation cancelled; repeated calls leave it unchanged."""
    reservation = await find_by_id(session, reservation_id)
    if reservation is None:
        raise ValueError(f"Reservation not found with ID: {reservation_id}")
    if reservation.status != ReservationStatus.CANCELLED:
        reservation.status = ReservationStatus.CANCELLED
        await _commit(session)
        await session.refresh(reservation)
        logger.info("Reservation %s cancelled", reservation_id)
    return reservation


async def delete_reservation(session: AsyncSession, reservation: Reservation) -> None:
    await session.delete(reservation)
    await session.commit()


def _validate_stay(start_date: date, end_date: date) -> None:
    if end_date <= start_date:
        raise InvalidRangeError("end_date must be after start_date")


async def _require_room(session: AsyncSession, room_id: uuid.UUID) -> Room:
    room = await room_service.find_by_id(session, room_id)
    if room is None:
        raise ValueError(f"Room not found with ID: {room_id}")
    return room


async def _ensure_room_free(
    session: AsyncSession,
    room_id: uuid.UUID,
    start_date: date,
    end_date: date,
    *,
    ignore_id: uuid.UUID | None = None,
) -> None:
    # stays sharing only a check-out/check-in day do not conflict
    stmt = select(Reservation.id).where(
        Reservation.room_id == room_id,
        Reservation.status == ReservationStatus.CONFIRMED,
        Reservation.start_date < end_date,
        Reservation.end_date > start_date,
    )
    if ignore_id is not None:
        stmt = stmt.where(Reservation.id != ignore_id)
    result = await session.execute(stmt.limit(1))
    if result.scalar_one_or_none() is not None:
        raise ValueError("Room is already booked for the requested dates")


async def _commit(session: AsyncSession) -> None:
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
