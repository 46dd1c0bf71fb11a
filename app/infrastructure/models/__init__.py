"""ORM models used by the application infrastructure."""

from .booking import BookingModel
from .notification import NotificationModel
from .push_subscription import PushSubscriptionModel

__all__ = [
    "BookingModel",
    "NotificationModel",
    "PushSubscriptionModel",
]
