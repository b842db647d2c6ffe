"""Common utilities for tests."""

import threading
from typing import Any, Iterator, Optional

from google.api_core.exceptions import AlreadyExists
from mockfirestore import CollectionReference, Query
from mockfirestore.document import DocumentReference

_CREATE_LOCK = threading.Lock()

COURT_ID = "court1"
STUDENT_ID = "student1"


class MockArrayUnion:
    def __init__(self, values: list[Any]) -> None:
        self.values = values

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter, create and ArrayUnion."""

    def collection_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:  # noqa: E501
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(CollectionReference, "_where"):
        CollectionReference._where = CollectionReference.where
        CollectionReference.where = collection_where

    def query_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(Query, "_where"):
        Query._where = Query.where
        Query.where = query_where

    if not hasattr(DocumentReference, "_orig_update"):
        DocumentReference._orig_update = DocumentReference.update

        def patched_update(self: Any, data: dict[str, Any]) -> Any:
            current_data = self.get().to_dict() or {}
            new_data = {}
            for k, v in data.items():
                if isinstance(v, MockArrayUnion):
                    existing = current_data.get(k, [])
                    if not isinstance(existing, list):
                        existing = []
                    # Simple append for mock, firestore does set union
                    merged = list(existing)
                    for item in v.values:
                        if item not in merged:
                            merged.append(item)
                    new_data[k] = merged
                else:
                    new_data[k] = v
            return self._orig_update(new_data)

        DocumentReference.update = patched_update

    if not getattr(DocumentReference, "_patched_create", False):

        def create(self: Any, document_data: dict[str, Any], **kwargs: Any) -> None:
            """Mirror Firestore's create(): refuse to overwrite an existing document."""
            with _CREATE_LOCK:
                if self.get().exists:
                    raise AlreadyExists(f"Document already exists: {self.id}")
                self.set(document_data)

        DocumentReference.create = create
        DocumentReference._patched_create = True


def make_court(**overrides: Any) -> dict[str, Any]:
    """Monday 09:00-17:00 tennis court with hourly slots and no buffer."""
    court = {
        "type": "tennis",
        "venue": "Main Campus",
        "timezone": "Africa/Cairo",
        "bookingSlotMinutes": 60,
        "bufferMinutes": 0,
        "status": "active",
        "openingHours": [{"weekday": 1, "startTime": "09:00", "endTime": "17:00"}],
        "exceptions": [],
    }
    court.update(overrides)
    return court


def make_user(**overrides: Any) -> dict[str, Any]:
    """A verified student."""
    user = {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john@example.com",
        "role": "Student",
        "status": "Active",
        "verified": True,
        "studentId": "2023001",
        "reservedCourts": [],
    }
    user.update(overrides)
    return user
