"""Aggregate application use cases."""

from .bookings import cleanup_expired_bookings, create_booking
from .notifications import fanout_push, publish_notification

__all__ = [
    "cleanup_expired_bookings",
    "create_booking",
    "fanout_push",
    "publish_notification",
]
