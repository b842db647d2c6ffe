"""Read access to court configuration documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from courtbook.constants import (
    COURT_STATUS_ACTIVE,
    COURTS_COLLECTION,
    DEFAULT_BOOKING_SLOT_MINUTES,
    DEFAULT_BUFFER_MINUTES,
)

from .models import Court

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


SUMMARY_FIELDS = (
    "type",
    "venue",
    "timezone",
    "status",
    "openingHours",
    "exceptions",
)


class CourtCatalog:
    """Lookup of court configuration. Holds no business rules."""

    @staticmethod
    def _with_defaults(court_id: str, data: dict[str, Any]) -> Court:
        court = cast(Court, dict(data))
        court["id"] = court_id
        # Missing and null settings both fall back to the defaults.
        if court.get("bookingSlotMinutes") is None:
            court["bookingSlotMinutes"] = DEFAULT_BOOKING_SLOT_MINUTES
        if court.get("bufferMinutes") is None:
            court["bufferMinutes"] = DEFAULT_BUFFER_MINUTES
        court.setdefault("status", COURT_STATUS_ACTIVE)
        court.setdefault("openingHours", [])
        court.setdefault("exceptions", [])
        return court

    @staticmethod
    def get_court(db: Client, court_id: str) -> Court | None:
        """Return the full configuration of a court, or ``None``."""
        snapshot = cast(
            "DocumentSnapshot",
            db.collection(COURTS_COLLECTION).document(court_id).get(),
        )
        if not snapshot.exists:
            return None
        return CourtCatalog._with_defaults(court_id, snapshot.to_dict() or {})

    @staticmethod
    def list_courts(db: Client) -> list[dict[str, Any]]:
        """Return a summary of every court."""
        courts = []
        for doc in db.collection(COURTS_COLLECTION).stream():
            data = doc.to_dict()
            if not data:
                continue
            court = CourtCatalog._with_defaults(doc.id, data)
            summary: dict[str, Any] = {"id": court["id"]}
            for key in SUMMARY_FIELDS:
                summary[key] = court.get(key)
            courts.append(summary)
        return courts
