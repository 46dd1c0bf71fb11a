"""Use cases for bookings and their periodic cleanup."""

from .cleanup_expired_bookings import CleanupResult, cleanup_expired_bookings
from .create_booking import create_booking
from .expiry import BOOKING_GRACE_WINDOW, booking_expiry, booking_start, parse_booking_time
from .list_bookings import list_bookings

__all__ = [
    "BOOKING_GRACE_WINDOW",
    "CleanupResult",
    "booking_expiry",
    "booking_start",
    "cleanup_expired_bookings",
    "create_booking",
    "list_bookings",
    "parse_booking_time",
]
