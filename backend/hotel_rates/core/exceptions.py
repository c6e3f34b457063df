"""Error types raised by the pricing and statistics layers."""

from __future__ import annotations


class PricingValidationError(ValueError):
    """Raised when a price, multiplier or event definition is rejected."""


class InvalidRangeError(PricingValidationError):
    """Raised when a date range ends before (or on) the day it starts."""


class DataIntegrityError(RuntimeError):
    """Raised when a reservation references a room missing from the snapshot."""

    def __init__(self, reservation_id: object, room_id: object) -> None:
        super().__init__(
            f"Room {room_id} not found for reservation {reservation_id}"
        )
        self.reservation_id = reservation_id
        self.room_id = room_id


__all__ = ["DataIntegrityError", "InvalidRangeError", "PricingValidationError"]
