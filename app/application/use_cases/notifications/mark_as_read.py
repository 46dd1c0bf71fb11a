"""Use cases for flagging notifications as read."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import NotificationRepository


def mark_notification_as_read(
    session: Session, notification_id: int, *, recipient_id: str
) -> None:
    """Mark one of the recipient's notifications as read."""

    repository = NotificationRepository(session)
    if not repository.mark_as_read(notification_id, recipient_id=recipient_id):
        msg = "Notification not found"
        raise ValueError(msg)


def mark_all_notifications_as_read(session: Session, *, recipient_id: str) -> int:
    """Mark every unread notification of the recipient as read."""

    return NotificationRepository(session).mark_all_as_read(recipient_id)
