"""Domain entity representing a recipient notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

NOTIFICATION_TYPE_INFO: Final[str] = "info"
NOTIFICATION_TYPE_WARNING: Final[str] = "warning"
NOTIFICATION_TYPE_SUCCESS: Final[str] = "success"
NOTIFICATION_TYPE_BROADCAST: Final[str] = "broadcast"

NOTIFICATION_TYPES: Final[frozenset[str]] = frozenset(
    {
        NOTIFICATION_TYPE_INFO,
        NOTIFICATION_TYPE_WARNING,
        NOTIFICATION_TYPE_SUCCESS,
        NOTIFICATION_TYPE_BROADCAST,
    }
)


@dataclass
class Notification:
    """Information message delivered to a specific recipient."""

    id: int | None
    recipient_id: str
    title: str
    message: str
    link: str | None = None
    type: str = NOTIFICATION_TYPE_INFO
    is_read: bool = False
    created_at: datetime | None = None


__all__ = [
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_WARNING",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_BROADCAST",
]
