"""Use case for confirming a booking on behalf of a customer."""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.domain.entities import BOOKING_STATUS_CONFIRMED, Booking, Notification
from app.infrastructure.repositories import BookingRepository

from ..notifications import notify_booking_confirmed
from .expiry import parse_booking_time


def create_booking(
    session: Session,
    *,
    user_id: str,
    venue_id: str,
    booking_date: date,
    booking_time: str,
    amount: Decimal,
) -> tuple[Booking, Notification]:
    """Store a confirmed booking and publish the confirmation notification."""

    parse_booking_time(booking_time)
    if amount < 0:
        raise ValueError("Amount must not be negative")

    booking = BookingRepository(session).create(
        Booking(
            id=None,
            user_id=user_id,
            venue_id=venue_id,
            booking_date=booking_date,
            booking_time=booking_time.strip().upper(),
            amount=amount,
            status=BOOKING_STATUS_CONFIRMED,
        )
    )
    notification = notify_booking_confirmed(session, booking=booking)
    return booking, notification
