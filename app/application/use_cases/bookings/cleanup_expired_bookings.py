"""Use case that purges bookings whose grace window has elapsed."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import BOOKING_EXPIRABLE_STATUSES
from app.infrastructure.repositories import BookingRepository
from app.utils import ensure_app_timezone, get_app_timezone, now_in_app_timezone

from .expiry import booking_expiry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanupResult:
    deleted: int

    @property
    def message(self) -> str:
        return f"Cleaned up {self.deleted} bookings"


def cleanup_expired_bookings(session: Session, *, now: datetime | None = None) -> CleanupResult:
    """Delete confirmed or completed bookings that ended more than 12 hours ago.

    Every candidate is loaded and filtered in memory, then the expired ones are
    removed with one statement. Bookings in any other status are never touched.
    """

    reference = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    tz = get_app_timezone()
    repository = BookingRepository(session)

    expired_ids: list[str] = []
    for booking in repository.list_by_statuses(BOOKING_EXPIRABLE_STATUSES):
        try:
            expiry = booking_expiry(booking.booking_date, booking.booking_time, tz)
        except ValueError:
            logger.warning(
                "Skipping booking %s with unparseable time %r",
                booking.id,
                booking.booking_time,
            )
            continue
        if expiry < reference:
            expired_ids.append(booking.id)

    if not expired_ids:
        return CleanupResult(deleted=0)

    deleted = repository.delete_many(expired_ids)
    logger.info("Deleted %s old bookings", deleted)
    return CleanupResult(deleted=deleted)


__all__ = ["CleanupResult", "cleanup_expired_bookings"]
