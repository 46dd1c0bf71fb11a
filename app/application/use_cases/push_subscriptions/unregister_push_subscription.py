"""Use case for removing one of the recipient's push endpoints."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import PushSubscriptionRepository


def unregister_push_subscription(
    session: Session, *, recipient_id: str, endpoint: str
) -> None:
    """Delete the subscription identified by ``endpoint``."""

    repository = PushSubscriptionRepository(session)
    if not repository.delete_by_endpoint(endpoint, recipient_id=recipient_id):
        msg = "Push subscription not found"
        raise ValueError(msg)
