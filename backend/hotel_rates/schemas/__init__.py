"""Schema exports."""

from hotel_rates.schemas.pricing import (
    BasePriceRead,
    BasePriceUpdate,
    EventDayRead,
    EventPricingCreate,
    NightPriceRead,
    QuoteRead,
    QuoteRequest,
    SeasonalPricingCreate,
    SeasonalRangeRead,
)
from hotel_rates.schemas.reporting import CategoryStatisticsRead, StatisticsSummaryRead
from hotel_rates.schemas.reservation import (
    ReservationCreate,
    ReservationRead,
    ReservationUpdate,
)
from hotel_rates.schemas.room import RoomRead

__all__ = [
    "BasePriceRead",
    "BasePriceUpdate",
    "CategoryStatisticsRead",
    "EventDayRead",
    "EventPricingCreate",
    "NightPriceRead",
    "QuoteRead",
    "QuoteRequest",
    "ReservationCreate",
    "ReservationRead",
    "ReservationUpdate",
    "RoomRead",
    "SeasonalPricingCreate",
    "SeasonalRangeRead",
    "StatisticsSummaryRead",
]
