"""In-memory pricing tables: base prices, seasonal and event multipliers.

Seasonal ranges are expanded into one entry per calendar day, so a later
insert covering a day simply replaces that day's factor. Event multipliers are
kept per day and per event name; only the highest factor of a day is used.
"""

from __future__ import annotations

import datetime
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from hotel_rates.core.exceptions import InvalidRangeError, PricingValidationError
from hotel_rates.models.hotel import RoomCategory

NEUTRAL = Decimal("1")
ZERO = Decimal("0.00")
ONE_DAY = datetime.timedelta(days=1)


@dataclass(frozen=True, slots=True)
class DateRangeGroup:
    """Contiguous run of calendar days sharing one multiplier."""

    start_date: datetime.date
    end_date: datetime.date

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def __str__(self) -> str:
        return f"{self.start_date.isoformat()} to {self.end_date.isoformat()}"


def as_decimal(value: Decimal | float | int | str) -> Decimal:
    """Convert a numeric input without inheriting binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def validate_price(price: Decimal | float | int | str) -> Decimal:
    amount = as_decimal(price)
    if not amount.is_finite() or amount < 0:
        raise PricingValidationError("Base price must be zero or greater")
    return amount


def validate_factor(factor: Decimal | float | int | str) -> Decimal:
    value = as_decimal(factor)
    if not value.is_finite() or value <= 0:
        raise PricingValidationError("Multiplier must be greater than zero")
    return value


def validate_range(start_date: datetime.date, end_date: datetime.date) -> None:
    if end_date < start_date:
        raise InvalidRangeError("end_date must be on or after start_date")


def validate_event_name(event_name: str) -> str:
    name = (event_name or "").strip()
    if not name:
        raise PricingValidationError("Event name is required")
    return name


def iter_days(
    start_date: datetime.date, end_date: datetime.date
) -> Iterable[datetime.date]:
    """Yield every day in ``[start_date, end_date]``."""
    day = start_date
    while day <= end_date:
        yield day
        day += ONE_DAY


def group_consecutive_days(
    sorted_entries: list[tuple[datetime.date, Decimal]],
) -> list[tuple[DateRangeGroup, Decimal]]:
    """Merge chronologically sorted day entries into ranges of equal value.

    A new group starts when a day does not directly follow the previous one or
    when its value differs from the running value.
    """
    if not sorted_entries:
        return []

    groups: list[tuple[DateRangeGroup, Decimal]] = []
    group_start, current = sorted_entries[0]
    previous_day = group_start

    for day, value in sorted_entries[1:]:
        if day != previous_day + ONE_DAY or value != current:
            groups.append((DateRangeGroup(group_start, previous_day), current))
            group_start, current = day, value
        previous_day = day

    groups.append((DateRangeGroup(group_start, previous_day), current))
    return groups


class MultiplierStore:
    """Owns the base price table and the day-indexed multiplier maps.

    Every read and write happens under one re-entrant lock, so a range insert
    is never observed half applied.
    """

    def __init__(
        self,
        base_prices: Mapping[RoomCategory, Decimal | float | int | str] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._base_prices: dict[RoomCategory, Decimal] = {}
        self._seasonal: dict[datetime.date, Decimal] = {}
        self._events: dict[datetime.date, dict[str, Decimal]] = {}
        for category, price in (base_prices or {}).items():
            self._base_prices[RoomCategory(category)] = validate_price(price)

    # Base prices -----------------------------------------------------------

    def get_base_price(self, category: RoomCategory) -> Decimal:
        with self._lock:
            return self._base_prices.get(category, ZERO)

    def update_base_price(
        self, category: RoomCategory, new_price: Decimal | float | int | str
    ) -> Decimal:
        price = validate_price(new_price)
        with self._lock:
            self._base_prices[RoomCategory(category)] = price
        return price

    def current_base_prices(self) -> dict[RoomCategory, Decimal]:
        with self._lock:
            return dict(self._base_prices)

    # Seasonal multipliers --------------------------------------------------

    def set_seasonal_multiplier(
        self,
        start_date: datetime.date,
        end_date: datetime.date,
        factor: Decimal | float | int | str,
    ) -> Decimal:
        validate_range(start_date, end_date)
        value = validate_factor(factor)
        days = list(iter_days(start_date, end_date))
        with self._lock:
            for day in days:
                self._seasonal[day] = value
        return value

    def seasonal_multiplier_on(self, day: datetime.date) -> Decimal:
        with self._lock:
            return self._seasonal.get(day, NEUTRAL)

    def grouped_seasonal_ranges(self) -> list[tuple[DateRangeGroup, Decimal]]:
        with self._lock:
            entries = sorted(self._seasonal.items())
        return group_consecutive_days(entries)

    def clear_seasonal_pricing(self) -> None:
        with self._lock:
            self._seasonal.clear()

    # Event multipliers -----------------------------------------------------

    def set_event_pricing(
        self,
        day: datetime.date,
        event_name: str,
        factor: Decimal | float | int | str,
    ) -> Decimal:
        name = validate_event_name(event_name)
        value = validate_factor(factor)
        with self._lock:
            self._events.setdefault(day, {})[name] = value
        return value

    def event_multiplier_on(self, day: datetime.date) -> Decimal:
        with self._lock:
            events = self._events.get(day)
            if not events:
                return NEUTRAL
            return max(events.values())

    def date_factors(self, day: datetime.date) -> tuple[Decimal, Decimal | None]:
        """Return the seasonal factor and the highest event factor of a day.

        Both are read under one lock acquisition. The event factor is ``None``
        on days without named events.
        """
        with self._lock:
            events = self._events.get(day)
            seasonal = self._seasonal.get(day, NEUTRAL)
            return seasonal, (max(events.values()) if events else None)

    def event_pricing_info(self) -> list[tuple[datetime.date, dict[str, Decimal]]]:
        with self._lock:
            return [(day, dict(events)) for day, events in sorted(self._events.items())]

    def clear_event_pricing(self) -> None:
        with self._lock:
            self._events.clear()
