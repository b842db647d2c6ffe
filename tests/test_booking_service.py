"""Tests for the reserve operation and the reservation store."""

from __future__ import annotations

import threading
import unittest
from unittest.mock import patch

from google.api_core.exceptions import ServiceUnavailable
from mockfirestore import MockFirestore

from courtbook.courts.availability import AvailabilityService
from courtbook.courts.services import BookingService
from courtbook.courts.store import ReservationStore
from courtbook.errors import AppError, ConflictError
from tests.conftest import (
    COURT_ID,
    STUDENT_ID,
    MockArrayUnion,
    make_court,
    make_user,
    patch_mockfirestore,
)

MONDAY = "2024-12-16"


class BookingServiceTestCase(unittest.TestCase):
    """Test case for BookingService.reserve."""

    def setUp(self) -> None:
        patch_mockfirestore()
        self.db = MockFirestore()
        self.db.collection("courts").document(COURT_ID).set(make_court())
        self.db.collection("users").document(STUDENT_ID).set(make_user())
        self.db.collection("users").document("student2").set(
            make_user(firstName="Ahmad", lastName="Hassan", studentId="2023002")
        )

        patcher = patch("firebase_admin.firestore.ArrayUnion", MockArrayUnion)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _reservations(self):
        return [
            d.to_dict()
            for d in self.db.collection("court_reservations").stream()
            if d.exists
        ]

    def test_reserve_success(self) -> None:
        reservation = BookingService.reserve(
            self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "09:00"}
        )

        self.assertEqual(reservation["id"], f"{COURT_ID}_{MONDAY}_0900")
        self.assertEqual(
            BookingService.serialize(reservation),
            {
                "id": f"{COURT_ID}_{MONDAY}_0900",
                "courtId": COURT_ID,
                "date": MONDAY,
                "startTime": "09:00",
                "endTime": "10:00",
                "studentName": "John Doe",
                "studentGucId": "2023001",
            },
        )

        stored = self._reservations()
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0]["userId"], STUDENT_ID)
        self.assertEqual(stored[0]["startTime"], "09:00")
        self.assertEqual(stored[0]["endTime"], "10:00")

    def test_reservation_linked_to_user(self) -> None:
        reservation = BookingService.reserve(
            self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "09:00"}
        )
        BookingService.reserve(
            self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "11:00"}
        )

        user = self.db.collection("users").document(STUDENT_ID).get().to_dict()
        self.assertEqual(
            user["reservedCourts"], [reservation["id"], f"{COURT_ID}_{MONDAY}_1100"]
        )

    def test_explicit_end_time(self) -> None:
        reservation = BookingService.reserve(
            self.db,
            COURT_ID,
            STUDENT_ID,
            {"date": MONDAY, "startTime": "10:00", "endTime": "11:00"},
        )
        self.assertEqual(reservation["startTime"], "10:00")
        self.assertEqual(reservation["endTime"], "11:00")

    def test_custom_slot_minutes(self) -> None:
        self.db.collection("courts").document(COURT_ID).set(
            make_court(bookingSlotMinutes=90)
        )
        reservation = BookingService.reserve(
            self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "09:00"}
        )
        self.assertEqual(reservation["endTime"], "10:30")

    def test_last_slot_of_the_day(self) -> None:
        reservation = BookingService.reserve(
            self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "16:00"}
        )
        self.assertEqual(reservation["endTime"], "17:00")

    def test_student_snapshot_is_not_a_live_read(self) -> None:
        reservation = BookingService.reserve(
            self.db, COURT_ID, "student2", {"date": MONDAY, "startTime": "09:00"}
        )
        self.db.collection("users").document("student2").update({"firstName": "Renamed"})

        self.assertEqual(reservation["studentName"], "Ahmad Hassan")
        self.assertEqual(self._reservations()[0]["studentName"], "Ahmad Hassan")

    def test_different_slots_can_both_be_reserved(self) -> None:
        BookingService.reserve(
            self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "09:00"}
        )
        BookingService.reserve(
            self.db, COURT_ID, "student2", {"date": MONDAY, "startTime": "10:00"}
        )
        self.assertEqual(len(self._reservations()), 2)

    def test_reserved_slot_becomes_unavailable(self) -> None:
        _, before = AvailabilityService.get_availability(self.db, COURT_ID, MONDAY)
        self.assertTrue(before.slots[2].isAvailable)

        BookingService.reserve(
            self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "11:00"}
        )

        _, after = AvailabilityService.get_availability(self.db, COURT_ID, MONDAY)
        self.assertFalse(after.slots[2].isAvailable)
        self.assertEqual(sum(not s.isAvailable for s in after.slots), 1)

    def test_second_reservation_of_same_slot_conflicts(self) -> None:
        BookingService.reserve(
            self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "09:00"}
        )
        with self.assertRaises(ConflictError) as ctx:
            BookingService.reserve(
                self.db, COURT_ID, "student2", {"date": MONDAY, "startTime": "09:00"}
            )
        self.assertEqual(ctx.exception.kind, "SlotAlreadyReserved")
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(len(self._reservations()), 1)

    def test_store_constraint_catches_what_the_precheck_missed(self) -> None:
        BookingService.reserve(
            self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "09:00"}
        )
        # Simulate a request whose validation ran before the first write landed.
        with patch.object(ReservationStore, "exists", return_value=False):
            with self.assertRaises(ConflictError) as ctx:
                BookingService.reserve(
                    self.db, COURT_ID, "student2", {"date": MONDAY, "startTime": "09:00"}
                )

        self.assertEqual(ctx.exception.kind, "SlotAlreadyReserved")
        self.assertEqual(ctx.exception.message, "Selected slot is already reserved")
        self.assertEqual(self._reservations()[0]["userId"], STUDENT_ID)
        user2 = self.db.collection("users").document("student2").get().to_dict()
        self.assertEqual(user2["reservedCourts"], [])

    def test_concurrent_reservations_exactly_one_wins(self) -> None:
        barrier = threading.Barrier(2)
        outcomes: dict[str, object] = {}
        real_exists = ReservationStore.exists

        def exists_then_wait(*args, **kwargs):
            result = real_exists(*args, **kwargs)
            # Both requests pass the advisory check before either writes.
            barrier.wait(timeout=5)
            return result

        def attempt(user_id: str) -> None:
            try:
                outcomes[user_id] = BookingService.reserve(
                    self.db, COURT_ID, user_id, {"date": MONDAY, "startTime": "14:00"}
                )
            except AppError as e:
                outcomes[user_id] = e

        with patch.object(ReservationStore, "exists", side_effect=exists_then_wait):
            threads = [
                threading.Thread(target=attempt, args=(uid,))
                for uid in (STUDENT_ID, "student2")
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join(timeout=10)

        errors = [o for o in outcomes.values() if isinstance(o, AppError)]
        successes = [o for o in outcomes.values() if not isinstance(o, AppError)]
        self.assertEqual(len(successes), 1)
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].kind, "SlotAlreadyReserved")
        self.assertEqual(errors[0].status_code, 409)
        self.assertEqual(len(self._reservations()), 1)

    def test_failed_user_link_keeps_reservation(self) -> None:
        with patch.object(
            ReservationStore, "link_to_user", side_effect=ServiceUnavailable("down")
        ):
            with self.assertLogs("courtbook.courts.services", level="ERROR"):
                reservation = BookingService.reserve(
                    self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "09:00"}
                )

        self.assertEqual(reservation["startTime"], "09:00")
        self.assertEqual(len(self._reservations()), 1)

    def test_rejected_request_writes_nothing(self) -> None:
        with self.assertRaises(AppError):
            BookingService.reserve(
                self.db, COURT_ID, STUDENT_ID, {"date": MONDAY, "startTime": "09:30"}
            )
        self.assertEqual(self._reservations(), [])
