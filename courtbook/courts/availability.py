"""Slot generation for court availability.

Everything except ``AvailabilityService`` is pure: a court's configuration and
a date go in, an ordered list of slots comes out.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from typing import TYPE_CHECKING

from courtbook.constants import TIME_BASIS_COURT
from courtbook.errors import InvalidFormatError, InvalidIdentifierError, NotFoundError

from .catalog import CourtCatalog
from .models import Availability, Court, Slot
from .store import ReservationStore
from .utils import (
    court_timezone,
    format_minutes,
    is_valid_court_id,
    parse_date,
    to_calendar_date,
    weekday_index,
    window_minutes,
)

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


UNAVAILABLE_REASON = "Court unavailable on this date"
CLOSED_REASON = "Court is closed on the selected date"


def parse_request_date(date_iso: object) -> datetime.date:
    """Parse a requested date or raise ``InvalidDateFormat``."""
    day = parse_date(date_iso)
    if day is None:
        raise InvalidFormatError(
            "Date must be in YYYY-MM-DD format", kind="InvalidDateFormat"
        )
    return day


def is_blacked_out(
    court: Court, day: datetime.date, time_basis: str = TIME_BASIS_COURT
) -> bool:
    """True if ``day`` falls inside any inclusive exception range."""
    tz = court_timezone(court, time_basis)
    for exception in court.get("exceptions") or []:
        start = to_calendar_date(exception["startDate"], tz)
        end = to_calendar_date(exception["endDate"], tz)
        if start <= day <= end:
            return True
    return False


def opening_windows(court: Court, day: datetime.date) -> list[tuple[int, int]]:
    """Opening windows for the weekday of ``day``, in configured order."""
    weekday = weekday_index(day)
    return [
        (window_minutes(entry["startTime"]), window_minutes(entry["endTime"]))
        for entry in court.get("openingHours") or []
        if int(entry["weekday"]) == weekday
    ]


def window_slots(
    window_start: int, window_end: int, slot_minutes: int, buffer_minutes: int
) -> list[tuple[int, int]]:
    """Consecutive slots inside one window, separated by the buffer."""
    if slot_minutes <= 0:
        raise ValueError("bookingSlotMinutes must be positive")
    step = slot_minutes + max(buffer_minutes, 0)
    slots = []
    start = window_start
    while start + slot_minutes <= window_end:
        slots.append((start, start + slot_minutes))
        start += step
    return slots


def generate_slots(court: Court, day: datetime.date) -> list[tuple[int, int]]:
    """All slots for ``day`` as minute pairs, windows never bridged."""
    slot_minutes = int(court["bookingSlotMinutes"])
    buffer_minutes = int(court["bufferMinutes"])
    slots: list[tuple[int, int]] = []
    for start, end in opening_windows(court, day):
        slots.extend(window_slots(start, end, slot_minutes, buffer_minutes))
    return slots


def compute_availability(
    court: Court,
    date_iso: str,
    reserved_start_times: Iterable[str] = (),
    time_basis: str = TIME_BASIS_COURT,
) -> Availability:
    """Compute the slots of ``court`` on ``date_iso``.

    A slot is unavailable when a reservation exists with the same start time.
    Blacked-out and closed dates return no slots and a reason. Exception
    timestamps are read in the court's timezone, or in UTC when
    ``time_basis`` is ``"utc"``.
    """
    day = parse_request_date(date_iso)

    if is_blacked_out(court, day, time_basis):
        return Availability(reason=UNAVAILABLE_REASON)
    if not opening_windows(court, day):
        return Availability(reason=CLOSED_REASON)

    taken = set(reserved_start_times)
    slots = []
    for start, end in generate_slots(court, day):
        start_time = format_minutes(start)
        slots.append(
            Slot(
                startTime=start_time,
                endTime=format_minutes(end),
                isAvailable=start_time not in taken,
            )
        )
    return Availability(slots=slots)


class AvailabilityService:
    """Loads a court and its reservations, then computes availability."""

    @staticmethod
    def get_availability(
        db: Client,
        court_id: str,
        date_iso: str,
        time_basis: str = TIME_BASIS_COURT,
    ) -> tuple[Court, Availability]:
        """Return the court together with its availability on ``date_iso``."""
        if not is_valid_court_id(court_id):
            raise InvalidIdentifierError("Invalid court ID", kind="InvalidCourtId")
        day = parse_request_date(date_iso)

        court = CourtCatalog.get_court(db, court_id)
        if court is None:
            raise NotFoundError("Court not found", kind="CourtNotFound")

        reserved = [
            r["startTime"]
            for r in ReservationStore.reservations_for_day(db, court_id, day.isoformat())
        ]
        return court, compute_availability(
            court, day.isoformat(), reserved, time_basis
        )
