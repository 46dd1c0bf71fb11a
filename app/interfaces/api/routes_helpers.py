"""Helper utilities shared across API route handlers."""

import logging

from app.application.use_cases.notifications import fanout_push
from app.config import get_settings
from app.domain.entities import Notification
from app.infrastructure.database import SessionLocal
from app.infrastructure.push import PushConfigurationError, WebPushSender

logger = logging.getLogger(__name__)


def notification_record(notification: Notification) -> dict[str, object]:
    """Return the row shape handed to the push fanout for ``notification``."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "title": notification.title,
        "message": notification.message,
        "link": notification.link,
        "type": notification.type,
    }


def run_push_fanout(record: dict[str, object]) -> None:
    """Background task fired after a notification insert.

    Runs outside the request session; failures are logged and never reach the
    client that created the notification.
    """

    settings = get_settings()
    if not settings.push_enabled:
        logger.debug("Push not configured; skipping fanout for %s", record.get("id"))
        return

    db = SessionLocal()
    try:
        result = fanout_push(
            db,
            record,
            sender_factory=WebPushSender.from_settings,
            max_workers=settings.push_max_workers,
        )
        logger.debug("Push fanout for notification %s: %s", record.get("id"), result.message)
    except PushConfigurationError as exc:
        logger.warning("Push fanout skipped: %s", exc)
    except Exception:
        logger.exception("Push fanout failed for notification %s", record.get("id"))
    finally:
        db.close()
