"""Validation of reservation requests.

Checks run in a fixed order and stop at the first failure, so a request
always produces the same error:

    court id, user id, date, startTime, endTime format, court exists,
    verified student, exception blackout, closed weekday, slot length,
    opening hours, slot alignment, slot already reserved.

Nothing here writes to Firestore. The reserved-slot check at the end is only
a fast path; ``ReservationStore.insert`` is what actually prevents double
booking.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from courtbook.constants import TIME_BASIS_COURT
from courtbook.errors import (
    ForbiddenError,
    InvalidFormatError,
    InvalidIdentifierError,
    InvalidRequestError,
    NotFoundError,
    UnavailableError,
)
from courtbook.user.models import StudentSnapshot
from courtbook.user.services import UserService

from .availability import (
    CLOSED_REASON,
    UNAVAILABLE_REASON,
    generate_slots,
    is_blacked_out,
    opening_windows,
    parse_request_date,
)
from .catalog import CourtCatalog
from .models import ReservationRequest, ValidatedReservation
from .store import ReservationStore, slot_taken_error
from .utils import format_minutes, is_valid_court_id, is_valid_document_id, parse_time

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


class ReservationValidator:
    """Turns a raw booking request into a ``ValidatedReservation``."""

    @staticmethod
    def validate(
        db: Client,
        court_id: Any,
        user_id: Any,
        request: ReservationRequest | dict[str, Any] | None,
        time_basis: str = TIME_BASIS_COURT,
    ) -> ValidatedReservation:
        """Run every check in order, raising the first ``AppError`` hit.

        ``time_basis`` selects the timezone exception timestamps are read in.
        """
        if not isinstance(request, ReservationRequest):
            request = ReservationRequest.from_payload(request)

        if not is_valid_court_id(court_id):
            raise InvalidIdentifierError("Invalid court ID", kind="InvalidCourtId")
        if not is_valid_document_id(user_id):
            raise InvalidIdentifierError("Invalid user ID", kind="InvalidUserId")

        day = parse_request_date(request.date)

        start = parse_time(request.startTime)
        if start is None:
            raise InvalidFormatError(
                "startTime must use HH:mm", kind="InvalidStartTimeFormat"
            )

        end = None
        if request.endTime is not None:
            end = parse_time(request.endTime)
            if end is None:
                raise InvalidFormatError(
                    "endTime must use HH:mm", kind="InvalidEndTimeFormat"
                )

        court = CourtCatalog.get_court(db, court_id)
        if court is None:
            raise NotFoundError("Court not found", kind="CourtNotFound")

        slot_minutes = int(court["bookingSlotMinutes"])
        if end is None:
            end = start + slot_minutes

        user = UserService.get_user(db, user_id)
        if not UserService.is_verified_student(user):
            raise ForbiddenError(
                "Only verified students can reserve courts", kind="NotAuthorized"
            )

        if is_blacked_out(court, day, time_basis):
            raise UnavailableError(UNAVAILABLE_REASON)
        windows = opening_windows(court, day)
        if not windows:
            raise UnavailableError(CLOSED_REASON)

        if end - start != slot_minutes:
            raise InvalidRequestError(
                f"Slot length must equal {slot_minutes} minutes",
                kind="SlotLengthMismatch",
            )

        if not any(w_start <= start and end <= w_end for w_start, w_end in windows):
            raise InvalidRequestError(
                "Requested time falls outside opening hours",
                kind="OutsideOpeningHours",
            )

        if (start, end) not in generate_slots(court, day):
            raise InvalidRequestError(
                "Requested time does not match any available slot",
                kind="SlotNotAligned",
            )

        start_time = format_minutes(start)
        if ReservationStore.exists(db, court_id, day.isoformat(), start_time):
            raise slot_taken_error()

        return ValidatedReservation(
            court_id=court_id,
            user_id=user_id,
            date=day,
            start_time=start_time,
            end_time=format_minutes(end),
            student=StudentSnapshot.from_user(user or {}),
        )
