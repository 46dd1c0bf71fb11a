"""Booking endpoints that feed the notification pipeline."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.bookings import (
    create_booking as create_booking_uc,
    list_bookings as list_bookings_uc,
)
from app.domain.entities import Booking, Principal
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_principal
from app.interfaces.api.routes_helpers import notification_record, run_push_fanout
from app.interfaces.api.schemas import BookingCreate, BookingRead

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _to_read_model(booking: Booking) -> BookingRead:
    return BookingRead.model_validate(booking)


@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_in: BookingCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> BookingRead:
    """Confirm a booking for the caller and notify them."""

    try:
        booking, notification = create_booking_uc(
            db,
            user_id=principal.id,
            venue_id=booking_in.venue_id,
            booking_date=booking_in.booking_date,
            booking_time=booking_in.booking_time,
            amount=booking_in.amount,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    background_tasks.add_task(run_push_fanout, notification_record(notification))
    return _to_read_model(booking)


@router.get("/", response_model=list[BookingRead])
def list_bookings(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> list[BookingRead]:
    """Return the caller's bookings."""

    return [_to_read_model(booking) for booking in list_bookings_uc(db, principal.id)]
