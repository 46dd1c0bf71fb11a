"""APScheduler wiring for the background jobs."""

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from app.config import Settings

from .cleanup_bookings_job import CLEANUP_BOOKINGS_JOB_ID, run_cleanup_bookings_job

logger = logging.getLogger(__name__)


def build_scheduler(settings: Settings) -> BackgroundScheduler | None:
    """Return a scheduler with the configured jobs, or ``None`` when disabled."""

    if settings.cleanup_interval_minutes <= 0:
        logger.info("Booking cleanup scheduler disabled")
        return None

    scheduler = BackgroundScheduler()
    scheduler.add_job(
        run_cleanup_bookings_job,
        "interval",
        minutes=settings.cleanup_interval_minutes,
        id=CLEANUP_BOOKINGS_JOB_ID,
        coalesce=True,
        max_instances=1,
    )
    return scheduler
