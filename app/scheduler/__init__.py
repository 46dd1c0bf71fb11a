"""Periodic jobs run by the API process."""

from .cleanup_bookings_job import CLEANUP_BOOKINGS_JOB_ID, run_cleanup_bookings_job
from .scheduler import build_scheduler

__all__ = ["CLEANUP_BOOKINGS_JOB_ID", "build_scheduler", "run_cleanup_bookings_job"]
