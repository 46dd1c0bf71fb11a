"""Domain entity representing a venue booking."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Final

BOOKING_STATUS_PENDING: Final[str] = "pending"
BOOKING_STATUS_CONFIRMED: Final[str] = "confirmed"
BOOKING_STATUS_COMPLETED: Final[str] = "completed"
BOOKING_STATUS_CANCELLED: Final[str] = "cancelled"

# Statuses whose rows are purged once their grace window has elapsed.
BOOKING_EXPIRABLE_STATUSES: Final[tuple[str, ...]] = (
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_COMPLETED,
)


@dataclass
class Booking:
    """Reservation of a venue slot by a user."""

    id: str | None
    user_id: str
    venue_id: str
    booking_date: date
    booking_time: str
    amount: Decimal
    status: str = BOOKING_STATUS_PENDING
    created_at: datetime | None = None


__all__ = [
    "Booking",
    "BOOKING_EXPIRABLE_STATUSES",
    "BOOKING_STATUS_PENDING",
    "BOOKING_STATUS_CONFIRMED",
    "BOOKING_STATUS_COMPLETED",
    "BOOKING_STATUS_CANCELLED",
]
