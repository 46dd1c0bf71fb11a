"""Domain entities exposed by the application."""

from .booking import (
    BOOKING_EXPIRABLE_STATUSES,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_COMPLETED,
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_PENDING,
    Booking,
)
from .notification import (
    NOTIFICATION_TYPE_BROADCAST,
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPE_WARNING,
    NOTIFICATION_TYPES,
    Notification,
)
from .principal import ROLE_ADMIN, ROLE_OWNER, ROLE_USER, Principal
from .push_subscription import PushSubscription

__all__ = [
    "Booking",
    "BOOKING_EXPIRABLE_STATUSES",
    "BOOKING_STATUS_PENDING",
    "BOOKING_STATUS_CONFIRMED",
    "BOOKING_STATUS_COMPLETED",
    "BOOKING_STATUS_CANCELLED",
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_WARNING",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_BROADCAST",
    "Principal",
    "ROLE_USER",
    "ROLE_OWNER",
    "ROLE_ADMIN",
    "PushSubscription",
]
