"""Service layer for reading user documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from courtbook.constants import ROLE_STUDENT, USERS_COLLECTION

from .models import User

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


class UserService:
    """Read-only access to user documents."""

    @staticmethod
    def get_user(db: Client, user_id: str) -> User | None:
        """Fetch a user by id, or ``None`` if the document does not exist."""
        snapshot = cast(
            "DocumentSnapshot", db.collection(USERS_COLLECTION).document(user_id).get()
        )
        if not snapshot.exists:
            return None
        data = cast(User, snapshot.to_dict() or {})
        data["id"] = user_id
        return data

    @staticmethod
    def is_verified_student(user: User | None) -> bool:
        """Only verified students may reserve courts."""
        return bool(
            user and user.get("verified") is True and user.get("role") == ROLE_STUDENT
        )
