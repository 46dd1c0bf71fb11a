"""Notifications emitted by other parts of the booking flow."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import (
    NOTIFICATION_TYPE_SUCCESS,
    Booking,
    Notification,
)

from .publish_notification import publish_notification


def notify_booking_confirmed(session: Session, *, booking: Booking) -> Notification:
    """Tell the customer that their booking went through."""

    message = (
        f"Your booking on {booking.booking_date.isoformat()} at {booking.booking_time} "
        "is confirmed."
    )
    return publish_notification(
        session,
        recipient_id=booking.user_id,
        title="Booking confirmed",
        message=message,
        link="/my-bookings",
        notification_type=NOTIFICATION_TYPE_SUCCESS,
    )


__all__ = ["notify_booking_confirmed"]
