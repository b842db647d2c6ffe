"""Routes for the courts blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, g, jsonify, request

from courtbook.auth.decorators import login_required, role_required
from courtbook.constants import ROLE_STUDENT, TIME_BASIS_UTC

from . import bp
from .availability import AvailabilityService
from .catalog import CourtCatalog
from .models import ReservationRequest
from .services import BookingService


def _display_timezone(court: dict[str, Any]) -> str:
    """Timezone label slot times are expressed in."""
    if current_app.config["COURT_TIME_BASIS"] == TIME_BASIS_UTC:
        return "UTC"
    return court.get("timezone") or "UTC"


@bp.route("", methods=["GET"])
def list_courts() -> Any:
    """List every court with its schedule."""
    db = firestore.client()
    courts = CourtCatalog.list_courts(db)
    message = "Courts successfully retrieved." if courts else "No courts found."
    return jsonify({"success": True, "message": message, "data": courts})


@bp.route("/<string:court_id>/availability", methods=["GET"])
@login_required
@role_required(ROLE_STUDENT)
def view_availability(court_id: str) -> Any:
    """Slots of a court on the date given by the ``date`` query parameter."""
    db = firestore.client()
    court, availability = AvailabilityService.get_availability(
        db,
        court_id,
        request.args.get("date"),
        current_app.config["COURT_TIME_BASIS"],
    )
    return jsonify(
        {
            "success": True,
            "message": availability.reason or "Availability loaded",
            "slots": [slot.to_dict() for slot in availability.slots],
            "timezone": _display_timezone(court),
        }
    )


@bp.route("/<string:court_id>/reservations", methods=["POST"])
@login_required
@role_required(ROLE_STUDENT)
def reserve_court(court_id: str) -> Any:
    """Reserve one slot of a court for the logged-in student."""
    db = firestore.client()
    payload = request.get_json(silent=True)
    reservation = BookingService.reserve(
        db,
        court_id,
        g.user["uid"],
        ReservationRequest.from_payload(payload if isinstance(payload, dict) else {}),
        current_app.config["COURT_TIME_BASIS"],
    )
    current_app.logger.info(f"Reservation {reservation['id']} created")
    return (
        jsonify(
            {
                "success": True,
                "message": "Court reserved successfully",
                "reservation": BookingService.serialize(reservation),
            }
        ),
        201,
    )
