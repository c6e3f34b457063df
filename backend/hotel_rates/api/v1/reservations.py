"""Reservation management API."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_rates.api import deps
from hotel_rates.models.reservation import Reservation, ReservationStatus
from hotel_rates.schemas.reservation import (
    ReservationCreate,
    ReservationRead,
    ReservationUpdate,
)
from hotel_rates.services import reservation_service
from hotel_rates.services.price_calculator import PriceCalculator

router = APIRouter()

SessionDep = Annotated[AsyncSession, Depends(deps.get_db_session)]
CalculatorDep = Annotated[PriceCalculator, Depends(deps.get_price_calculator)]


async def _get_or_404(session: AsyncSession, reservation_id: uuid.UUID) -> Reservation:
    reservation = await reservation_service.find_by_id(session, reservation_id)
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found"
        )
    return reservation


@router.get("", response_model=list[ReservationRead], summary="List reservations")
async def list_reservations(
    session: SessionDep,
    status_filter: ReservationStatus | None = Query(default=None, alias="status"),
    room_id: uuid.UUID | None = Query(default=None),
    customer_id: uuid.UUID | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
) -> list[ReservationRead]:
    if (start_date is None) != (end_date is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date and end_date must be supplied together",
        )
    if start_date is not None and end_date is not None:
        reservations = await reservation_service.find_by_date_range(
            session, start_date, end_date
        )
    elif room_id is not None:
        reservations = await reservation_service.find_by_room_id(session, room_id)
    elif customer_id is not None:
        reservations = await reservation_service.find_by_customer_id(
            session, customer_id
        )
    elif status_filter is not None:
        reservations = await reservation_service.find_by_status(session, status_filter)
    else:
        reservations = await reservation_service.find_all(session)

    def _keep(reservation: Reservation) -> bool:
        if status_filter is not None and reservation.status != status_filter:
            return False
        if room_id is not None and reservation.room_id != room_id:
            return False
        if customer_id is not None and reservation.customer_id != customer_id:
            return False
        return True

    return [ReservationRead.model_validate(obj) for obj in reservations if _keep(obj)]


@router.post(
    "",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Book a room",
)
async def create_reservation(
    payload: ReservationCreate,
    session: SessionDep,
    calculator: CalculatorDep,
) -> ReservationRead:
    try:
        reservation = await reservation_service.create_reservation(
            session,
            calculator,
            room_id=payload.room_id,
            customer_id=payload.customer_id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            occupancy_rate=payload.occupancy_rate,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return ReservationRead.model_validate(reservation)


@router.get(
    "/{reservation_id}", response_model=ReservationRead, summary="Get reservation"
)
async def get_reservation(
    reservation_id: uuid.UUID, session: SessionDep
) -> ReservationRead:
    reservation = await _get_or_404(session, reservation_id)
    return ReservationRead.model_validate(reservation)


@router.patch(
    "/{reservation_id}", response_model=ReservationRead, summary="Update reservation"
)
async def update_reservation(
    reservation_id: uuid.UUID,
    payload: ReservationUpdate,
    session: SessionDep,
    calculator: CalculatorDep,
) -> ReservationRead:
    reservation = await _get_or_404(session, reservation_id)
    try:
        reservation = await reservation_service.update_reservation(
            session,
            calculator,
            reservation,
            start_date=payload.start_date,
            end_date=payload.end_date,
            room_id=payload.room_id,
            status=payload.status,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return ReservationRead.model_validate(reservation)


@router.post(
    "/{reservation_id}/cancel",
    response_model=ReservationRead,
    summary="Cancel reservation",
)
async def cancel_reservation(
    reservation_id: uuid.UUID, session: SessionDep
) -> ReservationRead:
    await _get_or_404(session, reservation_id)
    reservation = await reservation_service.cancel_reservation(session, reservation_id)
    return ReservationRead.model_validate(reservation)


@router.delete(
    "/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete reservation",
)
async def delete_reservation(reservation_id: uuid.UUID, session: SessionDep) -> Response:
    reservation = await _get_or_404(session, reservation_id)
    await reservation_service.delete_reservation(session, reservation)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
