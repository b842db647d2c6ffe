"""Data models for the courts blueprint."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, Optional, TypedDict

from courtbook.core.types import FirestoreDocument
from courtbook.user.models import StudentSnapshot


class OpeningHour(TypedDict):
    """A recurring weekly window; weekday 0 is Sunday."""

    weekday: int
    startTime: str
    endTime: str


class CourtException(TypedDict, total=False):
    """An inclusive blackout range overriding every opening window."""

    startDate: Any
    endDate: Any
    reason: str


class Court(FirestoreDocument, total=False):
    """A court document in Firestore."""

    type: str
    venue: str
    timezone: str
    surface: str
    isIndoor: bool
    lightsAvailable: bool
    pricePerHour: float
    currency: str
    capacity: int
    bookingSlotMinutes: int
    bufferMinutes: int
    status: str
    openingHours: list[OpeningHour]
    exceptions: list[CourtException]


class Reservation(FirestoreDocument, total=False):
    """A court reservation document in Firestore."""

    courtId: str
    userId: str
    date: str
    startTime: str
    endTime: str
    studentName: str
    studentGucId: str


@dataclass(frozen=True)
class Slot:
    """A bookable ``[startTime, endTime)`` interval."""

    startTime: str
    endTime: str
    isAvailable: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize the slot for a JSON response."""
        return {
            "startTime": self.startTime,
            "endTime": self.endTime,
            "isAvailable": self.isAvailable,
        }


@dataclass
class Availability:
    """Slots for one court on one date.

    ``reason`` is set only when the court cannot be booked at all that day.
    """

    slots: list[Slot] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.reason is None


@dataclass
class ReservationRequest:
    """Raw booking request as received from the client."""

    date: Any = None
    startTime: Any = None
    endTime: Any = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> ReservationRequest:
        """Build a request from a JSON body, ignoring unknown keys."""
        payload = payload or {}
        return cls(
            date=payload.get("date"),
            startTime=payload.get("startTime"),
            endTime=payload.get("endTime"),
        )


@dataclass(frozen=True)
class ValidatedReservation:
    """A request that passed every check, ready to be persisted."""

    court_id: str
    user_id: str
    date: datetime.date
    start_time: str
    end_time: str
    student: StudentSnapshot

    @property
    def date_iso(self) -> str:
        return self.date.isoformat()
