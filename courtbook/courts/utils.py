"""Utility functions for parsing and formatting court schedule values."""

from __future__ import annotations

import datetime
import logging
import re
from collections.abc import Mapping
from typing import Any

import pytz

from courtbook.constants import (
    DATE_FORMAT,
    DATE_PATTERN,
    MAX_COURT_ID_BYTES,
    MAX_DOCUMENT_ID_BYTES,
    MINUTES_PER_DAY,
    TIME_BASIS_UTC,
    TIME_PATTERN,
)

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(DATE_PATTERN)
_TIME_RE = re.compile(TIME_PATTERN)
_RESERVED_ID_RE = re.compile(r"^__.*__$")


def is_valid_document_id(value: Any, max_bytes: int = MAX_DOCUMENT_ID_BYTES) -> bool:
    """Check a string against Firestore's document id rules."""
    if not isinstance(value, str) or not value:
        return False
    if value in (".", "..") or "/" in value:
        return False
    if _RESERVED_ID_RE.match(value):
        return False
    return len(value.encode("utf-8")) <= max_bytes


def is_valid_court_id(value: Any) -> bool:
    """A document id short enough to prefix a reservation id."""
    return is_valid_document_id(value, MAX_COURT_ID_BYTES)


def parse_date(value: Any) -> datetime.date | None:
    """Parse a strict ``YYYY-MM-DD`` string into a real calendar date.

    Returns ``None`` for anything else, including impossible dates such as
    ``2023-02-29``.
    """
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return None
    try:
        return datetime.datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_time(value: Any) -> int | None:
    """Parse a strict ``HH:mm`` string into minutes since midnight."""
    if not isinstance(value, str):
        return None
    match = _TIME_RE.match(value)
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def window_minutes(value: str) -> int:
    """Parse an opening-hours bound, where ``24:00`` closes at midnight."""
    if value == "24:00":
        return MINUTES_PER_DAY
    minutes = parse_time(value)
    if minutes is None:
        raise ValueError(f"Invalid opening hours time: {value!r}")
    return minutes


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as ``HH:mm``."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def court_timezone(court: Mapping[str, Any], time_basis: str) -> datetime.tzinfo:
    """Timezone in which a court's dates and slot times are read."""
    if time_basis == TIME_BASIS_UTC or not court.get("timezone"):
        return pytz.UTC
    try:
        return pytz.timezone(court["timezone"])
    except pytz.UnknownTimeZoneError:
        logger.warning(
            f"Court {court.get('id')} has unknown timezone "
            f"{court['timezone']!r}, using UTC"
        )
        return pytz.UTC


def to_calendar_date(value: Any, tz: datetime.tzinfo | None = None) -> datetime.date:
    """Normalize an exception bound stored as a timestamp, date or string.

    Aware timestamps are converted to ``tz`` (UTC by default) before the
    calendar date is taken; naive ones are used as they are.
    """
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz or pytz.UTC)
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        parsed = parse_date(value[:10])
        if parsed is not None:
            return parsed
    raise ValueError(f"Invalid exception date: {value!r}")


def weekday_index(day: datetime.date) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def reservation_id(court_id: str, date_iso: str, start_time: str) -> str:
    """Document id encoding the ``(court, date, startTime)`` uniqueness key."""
    return f"{court_id}_{date_iso}_{start_time.replace(':', '')}"
