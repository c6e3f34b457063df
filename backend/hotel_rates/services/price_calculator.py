"""Nightly and stay price composition."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from hotel_rates.core.exceptions import InvalidRangeError
from hotel_rates.models.hotel import RoomCategory
from hotel_rates.services.multiplier_store import (
    NEUTRAL,
    MultiplierStore,
    iter_days,
)

MONEY_PLACES = Decimal("0.01")
WEEKEND_MULTIPLIER = Decimal("1.5")
_WEEKEND_DAYS = {5, 6}

# (lower occupancy bound, discount) checked from the top down
_OCCUPANCY_TIERS: tuple[tuple[float, Decimal], ...] = (
    (0.5, Decimal("0.00")),
    (0.3, Decimal("0.10")),
)
_LOW_OCCUPANCY_DISCOUNT = Decimal("0.20")


def to_money(value: Decimal | float | str) -> Decimal:
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def is_weekend(day: datetime.date) -> bool:
    return day.weekday() in _WEEKEND_DAYS


def occupancy_discount(occupancy_rate: float) -> Decimal:
    """Return the discount fraction for an occupancy rate.

    Below 30% occupancy rooms are 20% off, below 50% they are 10% off, and
    from 50% upwards no discount applies.
    """
    for lower_bound, discount in _OCCUPANCY_TIERS:
        if occupancy_rate >= lower_bound:
            return discount
    return _LOW_OCCUPANCY_DISCOUNT


@dataclass(slots=True)
class NightPrice:
    """Price breakdown for a single room-night."""

    date: datetime.date
    weekend: bool
    date_multiplier: Decimal
    discount: Decimal
    amount: Decimal


@dataclass(slots=True)
class StayQuote:
    """Per-night breakdown and total for a stay."""

    category: RoomCategory
    start_date: datetime.date
    end_date: datetime.date
    occupancy_rate: float
    base_price: Decimal
    nights: list[NightPrice]
    total: Decimal


class PriceCalculator:
    """Composes base price, weekend, seasonal, event and occupancy layers.

    On a day with named events the highest of the seasonal factor and the
    event factors is applied; otherwise the seasonal factor alone applies.
    """

    def __init__(
        self,
        store: MultiplierStore,
        *,
        weekend_multiplier: Decimal = WEEKEND_MULTIPLIER,
    ) -> None:
        self.store = store
        self.weekend_multiplier = weekend_multiplier

    def date_multiplier(self, day: datetime.date) -> Decimal:
        seasonal, event = self.store.date_factors(day)
        if event is None:
            return seasonal
        return max(seasonal, event)

    def nightly_price(
        self,
        day: datetime.date,
        category: RoomCategory,
        occupancy_rate: float,
    ) -> Decimal:
        return self._price_night(day, category, occupancy_rate).amount

    def stay_price(
        self,
        start_date: datetime.date,
        end_date: datetime.date,
        category: RoomCategory,
        occupancy_rate: float,
    ) -> Decimal:
        return self.quote(start_date, end_date, category, occupancy_rate).total

    def quote(
        self,
        start_date: datetime.date,
        end_date: datetime.date,
        category: RoomCategory,
        occupancy_rate: float,
    ) -> StayQuote:
        """Price every night in ``[start_date, end_date)``."""
        if end_date <= start_date:
            raise InvalidRangeError("end_date must be after start_date")

        last_night = end_date - datetime.timedelta(days=1)
        nights = [
            self._price_night(day, category, occupancy_rate)
            for day in iter_days(start_date, last_night)
        ]
        return StayQuote(
            category=category,
            start_date=start_date,
            end_date=end_date,
            occupancy_rate=occupancy_rate,
            base_price=self.store.get_base_price(category),
            nights=nights,
            total=sum((night.amount for night in nights), Decimal("0")),
        )

    def _price_night(
        self,
        day: datetime.date,
        category: RoomCategory,
        occupancy_rate: float,
    ) -> NightPrice:
        weekend = is_weekend(day)
        multiplier = self.date_multiplier(day)
        discount = occupancy_discount(occupancy_rate)

        amount = self.store.get_base_price(category)
        if weekend:
            amount *= self.weekend_multiplier
        if multiplier != NEUTRAL:
            amount *= multiplier
        amount *= Decimal("1") - discount
        return NightPrice(
            date=day,
            weekend=weekend,
            date_multiplier=multiplier,
            discount=discount,
            amount=amount,
        )
