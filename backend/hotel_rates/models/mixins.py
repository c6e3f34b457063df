"""Shared column sets for ORM models."""
from datetime import UTC, datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _timestamp_column(*, refresh_on_update: bool = False) -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow if refresh_on_update else None,
        server_default=func.now(),
    )


class TimestampMixin:
    """Record when a row was first written and last changed."""

    created_at: Mapped[datetime] = _timestamp_column()
    updated_at: Mapped[datetime] = _timestamp_column(refresh_on_update=True)
