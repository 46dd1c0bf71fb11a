"""Helpers to compute when a booking stops being worth keeping."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Final

BOOKING_GRACE_WINDOW: Final[timedelta] = timedelta(hours=12)

_TIME_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*(?P<hour>\d{1,2}):(?P<minute>\d{2})\s*(?P<period>[AaPp][Mm])?\s*$"
)


def parse_booking_time(value: str) -> time:
    """Convert a ``h:mm AM/PM`` string into a 24-hour :class:`~datetime.time`.

    ``12 AM`` maps to hour 0, ``12 PM`` stays 12 and every other PM hour gains
    12. Values without a marker are read as 24-hour times. Raises
    ``ValueError`` for anything else.
    """

    match = _TIME_PATTERN.match(value or "")
    if not match:
        msg = f"Invalid booking time: {value!r}"
        raise ValueError(msg)

    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    period = (match.group("period") or "").upper()

    if period:
        if not 1 <= hour <= 12:
            msg = f"Invalid 12-hour booking time: {value!r}"
            raise ValueError(msg)
        if period == "PM" and hour != 12:
            hour += 12
        elif period == "AM" and hour == 12:
            hour = 0

    if hour > 23 or minute > 59:
        msg = f"Invalid booking time: {value!r}"
        raise ValueError(msg)
    return time(hour, minute)


def booking_start(booking_date: date, booking_time: str, tz: tzinfo) -> datetime:
    """Return the absolute instant at which the booking starts."""

    return datetime.combine(booking_date, parse_booking_time(booking_time), tzinfo=tz)


def booking_expiry(booking_date: date, booking_time: str, tz: tzinfo) -> datetime:
    """Return the instant after which the booking may be purged."""

    return booking_start(booking_date, booking_time, tz) + BOOKING_GRACE_WINDOW


__all__ = [
    "BOOKING_GRACE_WINDOW",
    "booking_expiry",
    "booking_start",
    "parse_booking_time",
]
