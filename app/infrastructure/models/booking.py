"""SQLAlchemy model for the booking table."""

from uuid import uuid4

from sqlalchemy import Column, Date, DateTime, Numeric, String

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


def _new_booking_id() -> str:
    return str(uuid4())


class BookingModel(Base):
    """Database representation of a venue booking."""

    __tablename__ = "booking"

    id = Column(String(36), primary_key=True, default=_new_booking_id)
    user_id = Column(String(64), nullable=False, index=True)
    venue_id = Column(String(64), nullable=False, index=True)
    booking_date = Column(Date, nullable=False)
    booking_time = Column(String(16), nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["BookingModel"]
