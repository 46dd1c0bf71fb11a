"""Use case for listing a customer's bookings."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Booking
from app.infrastructure.repositories import BookingRepository


def list_bookings(session: Session, user_id: str) -> Sequence[Booking]:
    """Return the bookings owned by ``user_id``, most recent date first."""

    return BookingRepository(session).list_for_user(user_id)
