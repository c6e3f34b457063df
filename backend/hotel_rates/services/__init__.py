"""Service layer exports."""
from hotel_rates.services import (
    multiplier_store,
    price_calculator,
    pricing_store_service,
    reservation_service,
    room_service,
    statistics_service,
)

__all__ = [
    "multiplier_store",
    "price_calculator",
    "pricing_store_service",
    "reservation_service",
    "room_service",
    "statistics_service",
]
