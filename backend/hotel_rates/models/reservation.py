"""Reservation models."""
from __future__ import annotations

import enum
import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_rates.db.base import Base
from hotel_rates.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from hotel_rates.models.hotel import Customer, Room


class ReservationStatus(str, enum.Enum):
    """Lifecycle states for reservations."""

    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Reservation(TimestampMixin, Base):
    """A booked span of nights in one room.

    ``start_date`` is the arrival day and ``end_date`` the departure day; the
    stay covers the nights ``[start_date, end_date)``.
    """

    __tablename__ = "reservations"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    customer_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("customers.id", ondelete="SET NULL"), nullable=True
    )
    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus), default=ReservationStatus.CONFIRMED, nullable=False
    )
    total_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0.00"), nullable=False
    )

    customer: Mapped["Customer | None"] = relationship(
        "Customer", back_populates="reservations"
    )
    room: Mapped["Room"] = relationship("Room", back_populates="reservations")

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days
