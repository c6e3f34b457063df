"""Initial hotel, reservation and pricing schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ROOM_CATEGORY = sa.Enum("SINGLE", "DOUBLE", "SUITE", name="roomcategory")
RESERVATION_STATUS = sa.Enum("CONFIRMED", "CANCELLED", name="reservationstatus")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "hotels",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=512)),
        *_timestamps(),
    )

    op.create_table(
        "rooms",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "hotel_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("hotels.id", ondelete="CASCADE"),
        ),
        sa.Column("room_number", sa.String(length=32)),
        sa.Column("category", ROOM_CATEGORY, nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("hotel_id", "room_number", name="uq_rooms_hotel_number"),
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255)),
        sa.Column("phone", sa.String(length=32)),
        *_timestamps(),
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "customer_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("customers.id", ondelete="SET NULL"),
        ),
        sa.Column(
            "room_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("rooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", RESERVATION_STATUS, nullable=False),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_reservations_room_id", "reservations", ["room_id"])
    op.create_index(
        "ix_reservations_dates", "reservations", ["start_date", "end_date"]
    )

    op.create_table(
        "base_prices",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("room_category", ROOM_CATEGORY, nullable=False, unique=True),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "seasonal_pricing",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("multiplier", sa.Numeric(8, 4), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "event_pricing",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("event_name", sa.String(length=120), nullable=False),
        sa.Column("multiplier", sa.Numeric(8, 4), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "event_date", "event_name", name="uq_event_pricing_day_name"
        ),
    )


def downgrade() -> None:
    op.drop_table("event_pricing")
    op.drop_table("seasonal_pricing")
    op.drop_table("base_prices")
    op.drop_index("ix_reservations_dates", table_name="reservations")
    op.drop_index("ix_reservations_room_id", table_name="reservations")
    op.drop_table("reservations")
    op.drop_table("customers")
    op.drop_table("rooms")
    op.drop_table("hotels")
    RESERVATION_STATUS.drop(op.get_bind(), checkfirst=True)
    ROOM_CATEGORY.drop(op.get_bind(), checkfirst=True)
