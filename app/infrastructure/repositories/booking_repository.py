"""Persistence layer for booking data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from sqlalchemy.orm import Session

from app.domain.entities import Booking
from app.infrastructure.models import BookingModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class BookingRepository:
    """Provide the booking queries used by notifications and cleanup."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_statuses(self, statuses: Iterable[str]) -> Sequence[Booking]:
        query = self.session.query(BookingModel).filter(
            BookingModel.status.in_(list(statuses))
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_user(self, user_id: str) -> Sequence[Booking]:
        query = (
            self.session.query(BookingModel)
            .filter(BookingModel.user_id == user_id)
            .order_by(BookingModel.booking_date.desc(), BookingModel.created_at.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, booking_id: str) -> Booking | None:
        model = self.session.get(BookingModel, booking_id)
        return self._to_entity(model) if model else None

    def create(self, booking: Booking) -> Booking:
        model = BookingModel()
        if booking.id:
            model.id = booking.id
        model.user_id = booking.user_id
        model.venue_id = booking.venue_id
        model.booking_date = booking.booking_date
        model.booking_time = booking.booking_time
        model.status = booking.status
        model.amount = booking.amount
        model.created_at = ensure_app_naive_datetime(
            booking.created_at or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_many(self, booking_ids: Iterable[str]) -> int:
        """Delete every booking in ``booking_ids`` with a single statement.

        Identifiers that no longer exist are ignored, so repeated calls are safe.
        """

        ids = [booking_id for booking_id in booking_ids if booking_id]
        if not ids:
            return 0
        try:
            deleted = (
                self.session.query(BookingModel)
                .filter(BookingModel.id.in_(ids))
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return deleted

    @staticmethod
    def _to_entity(model: BookingModel) -> Booking:
        return Booking(
            id=model.id,
            user_id=model.user_id,
            venue_id=model.venue_id,
            booking_date=model.booking_date,
            booking_time=model.booking_time,
            amount=Decimal(model.amount),
            status=model.status,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["BookingRepository"]
