"""Occupancy, revenue and cancellation statistics over reservation snapshots.

Every computation works on room and reservation lists handed in by the caller
and clips each reservation to the requested window before counting. Revenue is
re-derived night by night from the current pricing rules; the total stored on
a reservation at booking time is not used.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from hotel_rates.core.exceptions import DataIntegrityError
from hotel_rates.models.hotel import Room, RoomCategory
from hotel_rates.models.reservation import Reservation, ReservationStatus
from hotel_rates.services.price_calculator import PriceCalculator, to_money

logger = logging.getLogger(__name__)

ONE_DAY = datetime.timedelta(days=1)
DEFAULT_CANCELLATION_LOOKBACK_DAYS = 30


def window_days(start_date: datetime.date, end_date: datetime.date) -> int:
    """Number of days in the inclusive window, never negative."""
    return max((end_date - start_date).days + 1, 0)


def overlaps(
    span_start: datetime.date,
    span_end: datetime.date,
    window_start: datetime.date,
    window_end: datetime.date,
) -> bool:
    if window_end < window_start:
        return False
    return span_end >= window_start and span_start <= window_end


def clipped_days(
    span_start: datetime.date,
    span_end: datetime.date,
    window_start: datetime.date,
    window_end: datetime.date,
) -> int:
    """Inclusive day count of the intersection of a span and a window."""
    if not overlaps(span_start, span_end, window_start, window_end):
        return 0
    clipped_start = max(span_start, window_start)
    clipped_end = min(span_end, window_end)
    return (clipped_end - clipped_start).days + 1


def clipped_nights(
    span_start: datetime.date,
    span_end: datetime.date,
    window_start: datetime.date,
    window_end: datetime.date,
) -> tuple[datetime.date, datetime.date] | None:
    """Return ``[first_night, end)`` for the stay nights inside the window.

    Stay nights run from ``span_start`` up to the day before ``span_end``; a
    night counts when its date falls inside the inclusive window.
    """
    if not overlaps(span_start, span_end, window_start, window_end):
        return None
    first_night = max(span_start, window_start)
    end = min(span_end, window_end + ONE_DAY)
    if end <= first_night:
        return None
    return first_night, end


@dataclass(slots=True)
class CategoryStatistics:
    """Window figures for one room category."""

    category: RoomCategory
    room_count: int
    occupied_room_days: int
    available_room_days: int
    occupancy_rate: float
    revenue: Decimal
    cancellations: int


@dataclass(slots=True)
class StatisticsSummary:
    """Window figures for the whole property plus a per-category breakdown."""

    start_date: datetime.date
    end_date: datetime.date
    room_count: int
    occupied_room_days: int
    available_room_days: int
    occupancy_rate: float
    revenue: Decimal
    cancellations: int
    categories: list[CategoryStatistics] = field(default_factory=list)


class StatisticsAggregator:
    """Side-effect free statistics over room and reservation snapshots.

    A reservation whose room is missing from the room snapshot raises
    :class:`DataIntegrityError` when ``strict`` is set and is otherwise
    skipped with a warning.
    """

    def __init__(
        self,
        calculator: PriceCalculator,
        *,
        strict: bool = False,
        cancellation_lookback_days: int = DEFAULT_CANCELLATION_LOOKBACK_DAYS,
    ) -> None:
        self.calculator = calculator
        self.strict = strict
        self.cancellation_lookback_days = cancellation_lookback_days

    # Room resolution ---------------------------------------------------------

    @staticmethod
    def index_rooms(rooms: Iterable[Room]) -> dict[object, Room]:
        return {room.id: room for room in rooms}

    def resolve_category(
        self, reservation: Reservation, rooms_by_id: dict[object, Room]
    ) -> RoomCategory:
        room = rooms_by_id.get(reservation.room_id)
        if room is None:
            raise DataIntegrityError(reservation.id, reservation.room_id)
        return room.category

    def _category_or_skip(
        self, reservation: Reservation, rooms_by_id: dict[object, Room]
    ) -> RoomCategory | None:
        try:
            return self.resolve_category(reservation, rooms_by_id)
        except DataIntegrityError as exc:
            if self.strict:
                raise
            logger.warning("Skipping reservation in statistics: %s", exc)
            return None

    def _matching(
        self,
        rooms_by_id: dict[object, Room],
        reservations: Iterable[Reservation],
        status: ReservationStatus,
        start_date: datetime.date,
        end_date: datetime.date,
        category: RoomCategory | None,
    ) -> Iterable[tuple[Reservation, RoomCategory]]:
        for reservation in reservations:
            if reservation.status != status:
                continue
            if not overlaps(
                reservation.start_date, reservation.end_date, start_date, end_date
            ):
                continue
            resolved = self._category_or_skip(reservation, rooms_by_id)
            if resolved is None:
                continue
            if category is not None and resolved != category:
                continue
            yield reservation, resolved

    # Occupancy ---------------------------------------------------------------

    def occupied_room_days(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
        category: RoomCategory | None = None,
    ) -> int:
        rooms_by_id = self.index_rooms(rooms)
        return sum(
            clipped_days(
                reservation.start_date, reservation.end_date, start_date, end_date
            )
            for reservation, _ in self._matching(
                rooms_by_id,
                reservations,
                ReservationStatus.CONFIRMED,
                start_date,
                end_date,
                category,
            )
        )

    def occupancy_rate(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
    ) -> float:
        """Occupied room-days divided by available room-days (0.0 if none)."""
        available = len(rooms) * window_days(start_date, end_date)
        if available <= 0:
            return 0.0
        occupied = self.occupied_room_days(rooms, reservations, start_date, end_date)
        return occupied / available

    def occupancy_by_category(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
        category: RoomCategory,
    ) -> float:
        category_rooms = [room for room in rooms if room.category == category]
        available = len(category_rooms) * window_days(start_date, end_date)
        if available <= 0:
            return 0.0
        occupied = self.occupied_room_days(
            rooms, reservations, start_date, end_date, category
        )
        return occupied / available

    # Revenue -----------------------------------------------------------------

    def revenue(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
        occupancy_rate: float | None = None,
    ) -> Decimal:
        return self._revenue(
            rooms, reservations, start_date, end_date, None, occupancy_rate
        )

    def revenue_by_category(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
        category: RoomCategory,
        occupancy_rate: float | None = None,
    ) -> Decimal:
        return self._revenue(
            rooms, reservations, start_date, end_date, category, occupancy_rate
        )

    def _revenue(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
        category: RoomCategory | None,
        occupancy_rate: float | None,
    ) -> Decimal:
        if occupancy_rate is None:
            occupancy_rate = self.occupancy_rate(
                rooms, reservations, start_date, end_date
            )
        rooms_by_id = self.index_rooms(rooms)
        total = Decimal("0")
        for reservation, resolved in self._matching(
            rooms_by_id,
            reservations,
            ReservationStatus.CONFIRMED,
            start_date,
            end_date,
            category,
        ):
            nights = clipped_nights(
                reservation.start_date, reservation.end_date, start_date, end_date
            )
            if nights is None:
                continue
            total += self.calculator.stay_price(
                nights[0], nights[1], resolved, occupancy_rate
            )
        return total

    # Cancellations -----------------------------------------------------------

    def cancellation_count(
        self,
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
    ) -> int:
        return sum(
            1
            for reservation in reservations
            if reservation.status == ReservationStatus.CANCELLED
            and overlaps(
                reservation.start_date, reservation.end_date, start_date, end_date
            )
        )

    def cancellations_by_category(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
    ) -> dict[RoomCategory, int]:
        counts = {category: 0 for category in RoomCategory}
        for _, resolved in self._matching(
            self.index_rooms(rooms),
            reservations,
            ReservationStatus.CANCELLED,
            start_date,
            end_date,
            None,
        ):
            counts[resolved] += 1
        return counts

    # Summaries and reports ---------------------------------------------------

    def summarize(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
    ) -> StatisticsSummary:
        days = window_days(start_date, end_date)
        occupancy = self.occupancy_rate(rooms, reservations, start_date, end_date)
        cancellations = self.cancellations_by_category(
            rooms, reservations, start_date, end_date
        )
        categories: list[CategoryStatistics] = []
        for category in RoomCategory:
            room_count = sum(1 for room in rooms if room.category == category)
            categories.append(
                CategoryStatistics(
                    category=category,
                    room_count=room_count,
                    occupied_room_days=self.occupied_room_days(
                        rooms, reservations, start_date, end_date, category
                    ),
                    available_room_days=room_count * days,
                    occupancy_rate=self.occupancy_by_category(
                        rooms, reservations, start_date, end_date, category
                    ),
                    revenue=self.revenue_by_category(
                        rooms, reservations, start_date, end_date, category, occupancy
                    ),
                    cancellations=cancellations[category],
                )
            )
        return StatisticsSummary(
            start_date=start_date,
            end_date=end_date,
            room_count=len(rooms),
            occupied_room_days=self.occupied_room_days(
                rooms, reservations, start_date, end_date
            ),
            available_room_days=len(rooms) * days,
            occupancy_rate=occupancy,
            revenue=self.revenue(rooms, reservations, start_date, end_date, occupancy),
            cancellations=sum(cancellations.values()),
            categories=categories,
        )

    def occupancy_report(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
    ) -> str:
        summary = self.summarize(rooms, reservations, start_date, end_date)
        lines = [
            "Occupancy Report:",
            _period_line(start_date, end_date),
            f"Overall Occupancy Rate: {_percent(summary.occupancy_rate)} "
            f"({summary.occupied_room_days}/{summary.available_room_days} room-days)",
        ]
        for stats in summary.categories:
            lines.append(
                f"{stats.category.name} Rooms: {_percent(stats.occupancy_rate)} "
                f"({stats.occupied_room_days}/{stats.available_room_days} room-days)"
            )
        return "\n".join(lines) + "\n"

    def revenue_report(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
    ) -> str:
        summary = self.summarize(rooms, reservations, start_date, end_date)
        lines = [
            "Revenue Report:",
            _period_line(start_date, end_date),
            f"Total Revenue: {_dollars(summary.revenue)}",
        ]
        for stats in summary.categories:
            lines.append(
                f"{stats.category.name} Rooms Revenue: {_dollars(stats.revenue)}"
            )
        return "\n".join(lines) + "\n"

    def cancellation_report(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        today: datetime.date | None = None,
    ) -> str:
        """Cancellations overlapping the trailing lookback window ending today."""
        end_date = today or datetime.date.today()
        start_date = end_date - datetime.timedelta(days=self.cancellation_lookback_days)
        by_category = self.cancellations_by_category(
            rooms, reservations, start_date, end_date
        )
        # totals only count reservations whose room resolves
        total = sum(by_category.values())
        lines = [
            "Cancellation Report:",
            _period_line(start_date, end_date),
            f"Total Cancellations (Last {self.cancellation_lookback_days} days): {total}",
        ]
        for category, count in by_category.items():
            lines.append(f"{category.name} Room Cancellations: {count}")
        return "\n".join(lines) + "\n"

    def room_type_performance_report(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
    ) -> str:
        summary = self.summarize(rooms, reservations, start_date, end_date)
        lines = ["Room Type Performance Report:", _period_line(start_date, end_date)]
        for stats in summary.categories:
            lines.extend(
                [
                    f"{stats.category.name} Rooms:",
                    f"  Occupancy: {_percent(stats.occupancy_rate)}",
                    f"  Revenue: {_dollars(stats.revenue)}",
                ]
            )
        return "\n".join(lines) + "\n"

    def custom_range_report(
        self,
        rooms: Sequence[Room],
        reservations: Sequence[Reservation],
        start_date: datetime.date,
        end_date: datetime.date,
    ) -> str:
        summary = self.summarize(rooms, reservations, start_date, end_date)
        lines = [
            "Custom Range Report:",
            _period_line(start_date, end_date),
            f"Occupancy Rate: {_percent(summary.occupancy_rate)}",
            f"Total Revenue: {_dollars(summary.revenue)}",
            f"Cancellations: {summary.cancellations}",
        ]
        return "\n".join(lines) + "\n"


def _period_line(start_date: datetime.date, end_date: datetime.date) -> str:
    return f"Period: {start_date.isoformat()} to {end_date.isoformat()}"


def _percent(rate: float) -> str:
    return f"{rate * 100:.2f}%"


def _dollars(amount: Decimal) -> str:
    return f"${to_money(amount):,.2f}"
