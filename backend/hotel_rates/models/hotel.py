"""Hotel, room and customer models."""
from __future__ import annotations

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_rates.db.base import Base
from hotel_rates.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from hotel_rates.models.reservation import Reservation


class RoomCategory(str, enum.Enum):
    """Room classification driving base prices and occupancy grouping."""

    SINGLE = "single"
    DOUBLE = "double"
    SUITE = "suite"


class Hotel(TimestampMixin, Base):
    """A property that owns rooms."""

    __tablename__ = "hotels"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(512))

    rooms: Mapped[list["Room"]] = relationship(
        "Room", back_populates="hotel", cascade="all, delete-orphan"
    )


class Room(TimestampMixin, Base):
    """A bookable room of a fixed category."""

    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("hotel_id", "room_number", name="uq_rooms_hotel_number"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    hotel_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("hotels.id", ondelete="CASCADE"), nullable=True
    )
    room_number: Mapped[str | None] = mapped_column(String(32))
    category: Mapped[RoomCategory] = mapped_column(
        Enum(RoomCategory), nullable=False
    )
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    hotel: Mapped["Hotel | None"] = relationship("Hotel", back_populates="rooms")
    reservations: Mapped[list["Reservation"]] = relationship(
        "Reservation", back_populates="room"
    )


class Customer(TimestampMixin, Base):
    """Guest that holds reservations."""

    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(32))

    reservations: Mapped[list["Reservation"]] = relationship(
        "Reservation", back_populates="customer"
    )
