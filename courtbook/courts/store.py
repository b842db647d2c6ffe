"""Persistence of court reservations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists

from courtbook.constants import RESERVATIONS_COLLECTION, USERS_COLLECTION
from courtbook.errors import ConflictError

from .models import Reservation, ValidatedReservation
from .utils import reservation_id

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "Selected slot is already reserved"


def slot_taken_error() -> ConflictError:
    """The conflict returned both by the pre-check and by the store."""
    return ConflictError(SLOT_TAKEN_MESSAGE, kind="SlotAlreadyReserved")


class ReservationStore:
    """Reservations keyed by ``(court, date, startTime)``.

    The key is the document id, and ``create()`` refuses to overwrite an
    existing document, so the store itself rejects a second booking of the
    same slot.
    """

    @staticmethod
    def reservations_for_day(
        db: Client, court_id: str, date_iso: str
    ) -> list[Reservation]:
        """All reservations of a court on one date."""
        query = (
            db.collection(RESERVATIONS_COLLECTION)
            .where(filter=firestore.FieldFilter("courtId", "==", court_id))
            .where(filter=firestore.FieldFilter("date", "==", date_iso))
        )
        reservations = []
        for doc in query.stream():
            data = cast(Reservation, doc.to_dict() or {})
            data["id"] = doc.id
            reservations.append(data)
        return reservations

    @staticmethod
    def exists(db: Client, court_id: str, date_iso: str, start_time: str) -> bool:
        """Whether the slot already has a reservation."""
        doc_id = reservation_id(court_id, date_iso, start_time)
        snapshot = cast(
            "DocumentSnapshot",
            db.collection(RESERVATIONS_COLLECTION).document(doc_id).get(),
        )
        return bool(snapshot.exists)

    @staticmethod
    def insert(db: Client, validated: ValidatedReservation) -> Reservation:
        """Persist a reservation, raising ``SlotAlreadyReserved`` on a clash."""
        doc_id = reservation_id(
            validated.court_id, validated.date_iso, validated.start_time
        )
        data: dict[str, Any] = {
            "courtId": validated.court_id,
            "userId": validated.user_id,
            "date": validated.date_iso,
            "startTime": validated.start_time,
            "endTime": validated.end_time,
            **validated.student.to_dict(),
            "createdAt": firestore.SERVER_TIMESTAMP,
        }
        try:
            db.collection(RESERVATIONS_COLLECTION).document(doc_id).create(data)
        except AlreadyExists as e:
            logger.info(f"Lost race for slot {doc_id}")
            raise slot_taken_error() from e

        reservation = cast(Reservation, dict(data))
        reservation["id"] = doc_id
        return reservation

    @staticmethod
    def link_to_user(db: Client, user_id: str, reservation_id_: str) -> None:
        """Append the reservation id to the user's ``reservedCourts`` list."""
        db.collection(USERS_COLLECTION).document(user_id).update(
            {"reservedCourts": firestore.ArrayUnion([reservation_id_])}
        )
