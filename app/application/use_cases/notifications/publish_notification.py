"""Use case for inserting a notification and announcing it in realtime."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import NOTIFICATION_TYPE_INFO, NOTIFICATION_TYPES, Notification
from app.infrastructure.notifications import dispatch_notification
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone


def publish_notification(
    session: Session,
    *,
    recipient_id: str,
    title: str,
    message: str,
    link: str | None = None,
    notification_type: str = NOTIFICATION_TYPE_INFO,
) -> Notification:
    """Persist a notification and push the insert event to live clients.

    Push delivery to devices is the caller's concern; routes schedule it as a
    background task once the row exists.
    """

    recipient_id = (recipient_id or "").strip()
    if not recipient_id:
        raise ValueError("Recipient is required")
    if notification_type not in NOTIFICATION_TYPES:
        msg = f"Unsupported notification type: {notification_type}"
        raise ValueError(msg)
    if not title.strip():
        raise ValueError("Title is required")

    notification = Notification(
        id=None,
        recipient_id=recipient_id,
        title=title.strip(),
        message=message,
        link=link or None,
        type=notification_type,
        is_read=False,
        created_at=now_in_app_timezone(),
    )
    saved = NotificationRepository(session).create(notification)
    dispatch_notification(saved)
    return saved


__all__ = ["publish_notification"]
