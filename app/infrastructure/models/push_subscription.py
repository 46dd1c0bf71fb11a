"""SQLAlchemy model for Web Push subscriptions."""

from sqlalchemy import JSON, Column, DateTime, Integer, String

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class PushSubscriptionModel(Base):
    """Database representation of a device registered for push delivery."""

    __tablename__ = "push_subscription"

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(String(64), nullable=False, index=True)
    endpoint = Column(String(500), nullable=False, unique=True)
    subscription = Column(JSON, nullable=False, default=dict)
    user_agent = Column(String(255), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["PushSubscriptionModel"]
