"""Use cases for the notification feed and push fanout."""

from .events import notify_booking_confirmed
from .list_notifications import DEFAULT_FEED_LIMIT, list_notifications
from .mark_as_read import mark_all_notifications_as_read, mark_notification_as_read
from .publish_notification import publish_notification
from .push_fanout import FanoutResult, build_push_payload, fanout_push

__all__ = [
    "DEFAULT_FEED_LIMIT",
    "FanoutResult",
    "build_push_payload",
    "fanout_push",
    "list_notifications",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
    "notify_booking_confirmed",
    "publish_notification",
]
