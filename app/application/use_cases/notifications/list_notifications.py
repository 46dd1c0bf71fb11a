"""Use case for reading a recipient's notification feed."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository

DEFAULT_FEED_LIMIT = 20


def list_notifications(
    session: Session,
    recipient_id: str,
    *,
    limit: int = DEFAULT_FEED_LIMIT,
    unread_only: bool = False,
) -> Sequence[Notification]:
    """Return the most recent notifications for ``recipient_id``, newest first."""

    return NotificationRepository(session).list_for_recipient(
        recipient_id, limit=limit, unread_only=unread_only
    )
