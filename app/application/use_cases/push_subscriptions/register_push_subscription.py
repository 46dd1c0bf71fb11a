"""Use case for registering a device for push delivery."""

from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import PushSubscription
from app.infrastructure.repositories import PushSubscriptionRepository


def register_push_subscription(
    session: Session,
    *,
    recipient_id: str,
    subscription: dict[str, Any],
    user_agent: str | None = None,
) -> PushSubscription:
    """Store ``subscription`` for ``recipient_id``.

    Registering an endpoint that already exists moves it to the caller and
    refreshes its keys instead of adding a second row.
    """

    keys = subscription.get("keys") or {}
    if not subscription.get("endpoint"):
        raise ValueError("Subscription endpoint is required")
    if not keys.get("p256dh") or not keys.get("auth"):
        raise ValueError("Subscription keys p256dh and auth are required")

    entity = PushSubscription(
        id=None,
        recipient_id=recipient_id,
        subscription=subscription,
        user_agent=user_agent[:255] if user_agent else None,
    )
    return PushSubscriptionRepository(session).upsert(entity)
