"""
Seed script inserting a sample court document into the `courts` collection.

Usage:
    FIREBASE_KEY_PATH=path/to/key.json python scripts/seed_court.py
"""

from __future__ import annotations

import datetime
import os
import sys
from typing import TYPE_CHECKING, Any

import firebase_admin
from firebase_admin import credentials, firestore

from courtbook.constants import (
    COURT_STATUS_ACTIVE,
    COURT_TYPE_TENNIS,
    COURTS_COLLECTION,
)

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def sample_court() -> dict[str, Any]:
    """A weekday tennis court with a year-end holiday closure."""
    weekdays = range(1, 6)  # Monday to Friday
    return {
        "type": COURT_TYPE_TENNIS,
        "venue": "Main Campus Courts",
        "timezone": "UTC",
        "surface": "clay",
        "isIndoor": False,
        "lightsAvailable": True,
        "pricePerHour": 20,
        "currency": "USD",
        "capacity": 4,
        "bookingSlotMinutes": 60,
        "bufferMinutes": 10,
        "status": COURT_STATUS_ACTIVE,
        "openingHours": [
            {"weekday": day, "startTime": "08:00", "endTime": "20:00"}
            for day in weekdays
        ],
        "exceptions": [
            {
                "startDate": datetime.datetime(2025, 12, 24, tzinfo=datetime.timezone.utc),
                "endDate": datetime.datetime(2025, 12, 26, tzinfo=datetime.timezone.utc),
                "reason": "Holiday",
            }
        ],
        "createdAt": firestore.SERVER_TIMESTAMP,
        "updatedAt": firestore.SERVER_TIMESTAMP,
    }


def seed(db: Client) -> str:
    """Insert the sample court and return its document id."""
    _, court_ref = db.collection(COURTS_COLLECTION).add(sample_court())
    return court_ref.id


def main() -> None:
    """Main entry point for the seed script."""
    key_path = os.environ.get("FIREBASE_KEY_PATH")
    if not key_path:
        print("Error: FIREBASE_KEY_PATH environment variable must be set.")
        sys.exit(1)

    try:
        firebase_admin.initialize_app(credentials.Certificate(key_path))
        court_id = seed(firestore.client())
        print(f"Inserted court with id: {court_id}")
    except Exception as e:
        print(f"\nSeeder error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
