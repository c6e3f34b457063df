"""ORM models package export."""

from hotel_rates.models.hotel import Customer, Hotel, Room, RoomCategory
from hotel_rates.models.pricing import BasePrice, EventPricing, SeasonalPricing
from hotel_rates.models.reservation import Reservation, ReservationStatus

__all__ = [
    "BasePrice",
    "Customer",
    "EventPricing",
    "Hotel",
    "Reservation",
    "ReservationStatus",
    "Room",
    "RoomCategory",
    "SeasonalPricing",
]
