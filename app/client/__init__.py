"""Async client for the realtime notification feed."""

from .change_feed import ChangeFeed, ChangeSubscription, WebSocketChangeFeed
from .feed import FEED_LIMIT, FeedEntry, NotificationFeed, SyncState
from .gateway import HttpNotificationGateway, NotificationGateway
from .payloads import notification_from_payload

__all__ = [
    "ChangeFeed",
    "ChangeSubscription",
    "FEED_LIMIT",
    "FeedEntry",
    "HttpNotificationGateway",
    "NotificationFeed",
    "NotificationGateway",
    "SyncState",
    "WebSocketChangeFeed",
    "notification_from_payload",
]
