"""Reporting and analytics endpoints."""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_rates.api import deps
from hotel_rates.core.exceptions import DataIntegrityError
from hotel_rates.models.hotel import Room
from hotel_rates.models.reservation import Reservation
from hotel_rates.schemas.reporting import CategoryStatisticsRead, StatisticsSummaryRead
from hotel_rates.services import reservation_service, room_service
from hotel_rates.services.statistics_service import StatisticsAggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports")

SessionDep = Annotated[AsyncSession, Depends(deps.get_db_session)]
AggregatorDep = Annotated[StatisticsAggregator, Depends(deps.get_statistics_aggregator)]


class TextReport(str, enum.Enum):
    """Plain-text reports available from the aggregator."""

    OCCUPANCY = "occupancy"
    REVENUE = "revenue"
    CANCELLATIONS = "cancellations"
    ROOM_TYPES = "room-types"
    CUSTOM = "custom"


def _require_window(start_date: date | None, end_date: date | None) -> tuple[date, date]:
    if start_date is None or end_date is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date and end_date are required",
        )
    if start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date must be on or before end_date",
        )
    return start_date, end_date


async def _snapshot(
    session: AsyncSession, start_date: date, end_date: date
) -> tuple[Sequence[Room], Sequence[Reservation]]:
    rooms = await room_service.find_all(session)
    reservations = await reservation_service.find_overlapping(
        session, start_date, end_date
    )
    logger.debug(
        "Report snapshot %s to %s: %s rooms, %s reservations",
        start_date,
        end_date,
        len(rooms),
        len(reservations),
    )
    return rooms, reservations


def _integrity_error(exc: DataIntegrityError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.get(
    "/summary",
    response_model=StatisticsSummaryRead,
    summary="Occupancy, revenue and cancellations for a window",
)
async def statistics_summary(
    session: SessionDep,
    aggregator: AggregatorDep,
    start_date: date = Query(...),
    end_date: date = Query(...),
) -> StatisticsSummaryRead:
    start_date, end_date = _require_window(start_date, end_date)
    rooms, reservations = await _snapshot(session, start_date, end_date)
    try:
        summary = aggregator.summarize(rooms, reservations, start_date, end_date)
    except DataIntegrityError as exc:
        raise _integrity_error(exc) from exc
    return StatisticsSummaryRead.model_validate(summary)


@router.get(
    "/room-types",
    response_model=list[CategoryStatisticsRead],
    summary="Per room-type performance",
)
async def room_type_performance(
    session: SessionDep,
    aggregator: AggregatorDep,
    start_date: date = Query(...),
    end_date: date = Query(...),
) -> list[CategoryStatisticsRead]:
    start_date, end_date = _require_window(start_date, end_date)
    rooms, reservations = await _snapshot(session, start_date, end_date)
    try:
        summary = aggregator.summarize(rooms, reservations, start_date, end_date)
    except DataIntegrityError as exc:
        raise _integrity_error(exc) from exc
    return [CategoryStatisticsRead.model_validate(item) for item in summary.categories]


@router.get(
    "/text/{report}",
    response_class=PlainTextResponse,
    summary="Formatted text report",
)
async def text_report(
    report: TextReport,
    session: SessionDep,
    aggregator: AggregatorDep,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
) -> PlainTextResponse:
    try:
        if report is TextReport.CANCELLATIONS:
            rooms = await room_service.find_all(session)
            reservations = await reservation_service.find_all(session)
            body = aggregator.cancellation_report(rooms, reservations, today=end_date)
        else:
            window = _require_window(start_date, end_date)
            rooms, reservations = await _snapshot(session, *window)
            render = {
                TextReport.OCCUPANCY: aggregator.occupancy_report,
                TextReport.REVENUE: aggregator.revenue_report,
                TextReport.ROOM_TYPES: aggregator.room_type_performance_report,
                TextReport.CUSTOM: aggregator.custom_range_report,
            }[report]
            body = render(rooms, reservations, *window)
    except DataIntegrityError as exc:
        raise _integrity_error(exc) from exc
    return PlainTextResponse(body)
