"""
Purge stale bookings: every CLEANUP_INTERVAL_MINUTES, delete confirmed/completed
bookings whose start time is more than 12 hours in the past.

Overlapping runs are harmless; deleting an id that is already gone is a no-op.
"""
import logging

from app.application.use_cases.bookings import cleanup_expired_bookings
from app.infrastructure.database import SessionLocal

logger = logging.getLogger(__name__)

CLEANUP_BOOKINGS_JOB_ID = "cleanup_bookings"


def run_cleanup_bookings_job() -> int:
    """Run one sweep and return the number of deleted bookings (0 on failure)."""

    db = SessionLocal()
    try:
        result = cleanup_expired_bookings(db)
        if result.deleted:
            logger.info("Cleanup job: %s", result.message)
        else:
            logger.debug("Cleanup job: nothing to delete")
        return result.deleted
    except Exception as e:
        logger.exception("Cleanup job failed: %s", e)
        db.rollback()
        return 0
    finally:
        db.close()
