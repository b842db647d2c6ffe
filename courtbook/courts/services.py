"""Service layer composing validation and persistence of reservations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from google.api_core.exceptions import GoogleAPICallError

from courtbook.constants import TIME_BASIS_COURT

from .models import Reservation, ReservationRequest
from .store import ReservationStore
from .validator import ReservationValidator

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)


RESERVATION_FIELDS = (
    "id",
    "courtId",
    "date",
    "startTime",
    "endTime",
    "studentName",
    "studentGucId",
)


class BookingService:
    """Handles the reserve operation exposed to clients."""

    @staticmethod
    def reserve(
        db: Client,
        court_id: Any,
        user_id: Any,
        request: ReservationRequest | dict[str, Any] | None,
        time_basis: str = TIME_BASIS_COURT,
    ) -> Reservation:
        """Validate a request and persist the reservation.

        Raises:
            AppError: The first failed check, or ``SlotAlreadyReserved`` when
                another request claimed the slot after validation passed.
        """
        validated = ReservationValidator.validate(
            db, court_id, user_id, request, time_basis
        )
        reservation = ReservationStore.insert(db, validated)

        # The reservation is already authoritative; a missing back-reference
        # on the user is tolerated.
        try:
            ReservationStore.link_to_user(db, validated.user_id, reservation["id"])
        except GoogleAPICallError as e:
            logger.error(
                f"Reservation {reservation['id']} saved but not linked to user "
                f"{validated.user_id}: {e}"
            )

        logger.info(
            f"Court {validated.court_id} reserved on {validated.date_iso} "
            f"{validated.start_time}-{validated.end_time} by {validated.user_id}"
        )
        return reservation

    @staticmethod
    def serialize(reservation: Reservation) -> dict[str, Any]:
        """Public view of a reservation."""
        return {key: reservation.get(key) for key in RESERVATION_FIELDS}
