"""Workout options, bookings and admin workout management API."""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request
from pymongo.database import Database

from backend.auth import require_roles
from backend.controllers.workout import WorkoutController
from backend.database import get_db, to_object_id
from backend.models import AuthenticatedUser, UserRole
from backend.responses import format_error_response, success_response
from backend.schema.booking import WorkoutBooking, WorkoutFilter
from backend.schema.validation import validate_payload
from backend.schema.workout_option import CreateWorkoutOption, WorkoutMapping

router = APIRouter(prefix="/workouts", tags=["workouts"])
admin_router = APIRouter(tags=["admin"])


@router.get("/available")
async def get_available_workouts(request: Request, db: Database = Depends(get_db)):
    """Search coaches with free slots by workout, coach, time slot and date."""
    try:
        filters = validate_payload(WorkoutFilter, dict(request.query_params))
        workouts = WorkoutController(db).get_filtered_coaches(filters)
        return success_response(workouts, "Available workouts fetched successfully")
    except Exception as e:
        return format_error_response(e)


@router.get("/workout-options")
async def get_workout_options(db: Database = Depends(get_db)):
    """Workout options and the coaches offering them, as select options."""
    try:
        options = WorkoutController(db).get_all()

        coach_options = {}
        for option in options:
            for coach in option["coachesId"]:
                coach_options.setdefault(
                    coach["_id"],
                    {"value": coach["_id"], "label": f"{coach['firstName']} {coach['lastName']}"},
                )

        data = {
            "workoutOption": [{"value": o["_id"], "label": o["name"]} for o in options],
            "coachOptions": list(coach_options.values()),
        }
        return success_response(data, "Workout options fetched successfully")
    except Exception as e:
        return format_error_response(e)


@router.get("/{workout_id}/coaches")
async def get_coaches_for_workout(workout_id: str, db: Database = Depends(get_db)):
    """Coaches offering a workout option."""
    try:
        coaches = WorkoutController(db).fetch_coaches_for_workout(workout_id)
        return success_response(coaches, "Coaches fetched successfully")
    except Exception as e:
        return format_error_response(e)


@router.post("")
async def book_workout(
    payload: Dict[str, Any] = Body(default=None),
    user: AuthenticatedUser = Depends(require_roles(UserRole.CLIENT)),
    db: Database = Depends(get_db),
):
    try:
        booking = validate_payload(WorkoutBooking, payload)
        result = WorkoutController(db).book_workout(
            client_id=to_object_id(user.user_id, "user ID"),
            workout_id=to_object_id(booking.workout_id, "workout ID"),
            coach_id=to_object_id(booking.coach_id, "coach ID"),
            time_slot_id=to_object_id(booking.time_slot_id, "time slot ID"),
            date=booking.date,
        )
        return success_response(result, "Workout booked successfully", status_code=201)
    except Exception as e:
        return format_error_response(e)


@router.get("/bookings")
async def get_workout_bookings(
    user: AuthenticatedUser = Depends(require_roles(UserRole.CLIENT, UserRole.COACH)),
    db: Database = Depends(get_db),
):
    # Existing clients expect 201 here
    try:
        bookings = WorkoutController(db).get_user_bookings(to_object_id(user.user_id, "user ID"))
        return success_response(bookings, "Workout bookings fetched successfully", status_code=201)
    except Exception as e:
        return format_error_response(e)


@router.delete("/{booking_id}")
async def cancel_workout(
    booking_id: str,
    user: AuthenticatedUser = Depends(require_roles(UserRole.CLIENT)),
    db: Database = Depends(get_db),
):
    try:
        result = WorkoutController(db).cancel_workout(
            to_object_id(user.user_id, "user ID"),
            to_object_id(booking_id, "booking ID"),
        )
        return success_response(result, "Workout cancelled successfully", status_code=201)
    except Exception as e:
        return format_error_response(e)


@admin_router.post("/create-workout")
async def create_workout(
    payload: Dict[str, Any] = Body(default=None),
    user: AuthenticatedUser = Depends(require_roles(UserRole.ADMIN)),
    db: Database = Depends(get_db),
):
    """Create a workout option."""
    try:
        workout = validate_payload(CreateWorkoutOption, payload)
        result = WorkoutController(db).create(workout.name)
        return success_response(result, "Workout created successfully", status_code=201)
    except Exception as e:
        return format_error_response(e)


@admin_router.post("/map-workouts")
async def map_workouts(
    payload: Dict[str, Any] = Body(default=None),
    user: AuthenticatedUser = Depends(require_roles(UserRole.ADMIN)),
    db: Database = Depends(get_db),
):
    """Assign workout options to a coach."""
    try:
        mapping = validate_payload(WorkoutMapping, payload)
        result = WorkoutController(db).map_workouts_to_coach(mapping.coach_id, mapping.workout_ids)
        return success_response(result, "Workouts mapped successfully", status_code=201)
    except Exception as e:
        return format_error_response(e)
