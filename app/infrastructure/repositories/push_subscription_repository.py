"""Persistence helpers for push subscriptions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import PushSubscription
from app.infrastructure.models import PushSubscriptionModel
from app.utils import ensure_app_timezone


class PushSubscriptionRepository:
    """Store and look up the push endpoints registered by recipients."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_recipient(self, recipient_id: str) -> Sequence[PushSubscription]:
        query = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.recipient_id == recipient_id)
            .order_by(PushSubscriptionModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Insert ``subscription`` or refresh the row sharing its endpoint."""

        endpoint = subscription.endpoint
        if not endpoint:
            raise ValueError("Push subscription endpoint is required")

        model = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.endpoint == endpoint)
            .one_or_none()
        )
        if model is None:
            model = PushSubscriptionModel(endpoint=endpoint)
            self.session.add(model)
        model.recipient_id = subscription.recipient_id
        model.subscription = dict(subscription.subscription)
        model.user_agent = subscription.user_agent
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_by_endpoint(self, endpoint: str, *, recipient_id: str) -> bool:
        deleted = (
            self.session.query(PushSubscriptionModel)
            .filter(
                PushSubscriptionModel.endpoint == endpoint,
                PushSubscriptionModel.recipient_id == recipient_id,
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted > 0

    def delete_many(self, subscription_ids: Iterable[int]) -> int:
        ids = [subscription_id for subscription_id in subscription_ids if subscription_id is not None]
        if not ids:
            return 0
        try:
            deleted = (
                self.session.query(PushSubscriptionModel)
                .filter(PushSubscriptionModel.id.in_(ids))
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return deleted

    @staticmethod
    def _to_entity(model: PushSubscriptionModel) -> PushSubscription:
        return PushSubscription(
            id=model.id,
            recipient_id=model.recipient_id,
            subscription=dict(model.subscription or {}),
            user_agent=model.user_agent,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["PushSubscriptionRepository"]
