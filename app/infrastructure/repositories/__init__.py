"""Repository implementations for infrastructure layer."""

from .booking_repository import BookingRepository
from .notification_repository import NotificationRepository
from .push_subscription_repository import PushSubscriptionRepository

__all__ = [
    "BookingRepository",
    "NotificationRepository",
    "PushSubscriptionRepository",
]
