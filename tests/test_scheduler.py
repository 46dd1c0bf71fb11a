"""Tests for the background job wiring."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from app.config import Settings
from app.domain.entities import Booking
from app.infrastructure.repositories import BookingRepository
from app.scheduler import CLEANUP_BOOKINGS_JOB_ID, build_scheduler, run_cleanup_bookings_job


def test_scheduler_disabled_when_interval_is_zero() -> None:
    assert build_scheduler(Settings(cleanup_interval_minutes=0)) is None


def test_scheduler_registers_cleanup_job() -> None:
    scheduler = build_scheduler(Settings(cleanup_interval_minutes=15))

    job = scheduler.get_job(CLEANUP_BOOKINGS_JOB_ID)

    assert job is not None
    assert job.max_instances == 1
    assert job.trigger.interval.total_seconds() == 15 * 60


def test_cleanup_job_runs_a_sweep(db_session) -> None:
    BookingRepository(db_session).create(
        Booking(
            id="stale",
            user_id="customer-1",
            venue_id="venue-1",
            booking_date=date(2023, 1, 1),
            booking_time="10:00 AM",
            amount=Decimal("5.00"),
            status="completed",
        )
    )

    assert run_cleanup_bookings_job() == 1
    assert run_cleanup_bookings_job() == 0
