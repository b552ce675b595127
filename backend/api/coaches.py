"""Coach listing, coach details and availability API."""
from typing import Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from backend.auth import require_roles
from backend.controllers.coach import CoachController
from backend.database import get_db, to_object_id
from backend.models import AuthenticatedUser, UserRole
from backend.responses import format_error_response, success_response
from backend.schema.booking import BookingDay
from backend.schema.validation import validate_payload

router = APIRouter(prefix="/coaches", tags=["coaches"])
bookings_router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("")
async def list_coaches(db: Database = Depends(get_db)):
    """All coaches with their details."""
    try:
        coaches = CoachController(db).get_all_coaches()
        return success_response(coaches, "Coaches fetched successfully")
    except Exception as e:
        return format_error_response(e)


@router.get("/{coach_id}")
async def get_coach(coach_id: str, db: Database = Depends(get_db)):
    try:
        coach = CoachController(db).get_coach_by_id(coach_id)
        return success_response(coach, "Coach fetched successfully")
    except Exception as e:
        return format_error_response(e)


@router.get("/{coach_id}/time-slots")
async def get_coach_time_slots(
    coach_id: str,
    date: Optional[str] = None,
    db: Database = Depends(get_db),
):
    """Every time slot for the day, each flagged with isBooked."""
    try:
        query = validate_payload(BookingDay, {"date": date})
        slots = CoachController(db).get_coach_available_time_slots(
            to_object_id(coach_id, "coach ID"), query.date
        )
        return success_response(slots, "Available time slots fetched successfully")
    except Exception as e:
        return format_error_response(e)


@bookings_router.get("/day")
async def get_bookings_for_day(
    date: Optional[str] = None,
    user: AuthenticatedUser = Depends(require_roles(UserRole.CLIENT, UserRole.COACH)),
    db: Database = Depends(get_db),
):
    """The caller's bookings on one day, from the client or the coach side."""
    try:
        query = validate_payload(BookingDay, {"date": date})
        bookings = CoachController(db).get_user_bookings_for_day(
            to_object_id(user.user_id, "user ID"), query.date, user.role
        )
        return success_response(bookings, "Bookings fetched successfully")
    except Exception as e:
        return format_error_response(e)
