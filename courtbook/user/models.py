"""Data models for user documents."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from courtbook.core.types import FirestoreDocument


class User(FirestoreDocument, total=False):
    """A user document in Firestore."""

    email: str
    firstName: str
    lastName: str
    role: str
    status: str
    verified: bool
    studentId: str
    reservedCourts: list[str]


@dataclass(frozen=True)
class StudentSnapshot:
    """Student details copied into a reservation when it is created."""

    studentName: str
    studentGucId: str

    @classmethod
    def from_user(cls, user: User | dict[str, Any]) -> StudentSnapshot:
        """Capture the name and student id from a user document."""
        first = (user.get("firstName") or "").strip()
        last = (user.get("lastName") or "").strip()
        name = " ".join(part for part in (first, last) if part)
        return cls(
            studentName=name or user.get("email", ""),
            studentGucId=str(user.get("studentId") or ""),
        )

    def to_dict(self) -> dict[str, str]:
        """Return the snapshot as document fields."""
        return asdict(self)
