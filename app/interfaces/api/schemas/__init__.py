from .booking import BookingCreate, BookingRead
from .functions import NotificationRecord, PushFunctionRequest
from .notification import (
    NotificationCreate,
    NotificationMarkAllResponse,
    NotificationRead,
    NotificationReadAck,
)
from .push_subscription import (
    PushSubscriptionCreate,
    PushSubscriptionRead,
    VapidPublicKeyRead,
)

__all__ = [
    "BookingCreate",
    "BookingRead",
    "NotificationCreate",
    "NotificationMarkAllResponse",
    "NotificationRead",
    "NotificationReadAck",
    "NotificationRecord",
    "PushFunctionRequest",
    "PushSubscriptionCreate",
    "PushSubscriptionRead",
    "VapidPublicKeyRead",
]
