"""Booking payloads."""
from datetime import datetime
from typing import Annotated, Optional

from backend.schema.validation import Payload, day, required, text


class WorkoutBooking(Payload):
    workout_id: Annotated[str, text("Workout ID is required")] = required()
    coach_id: Annotated[str, text("Coach ID is required")] = required()
    time_slot_id: Annotated[str, text("Time Slot ID is required")] = required()
    date: Annotated[datetime, day("Invalid date format")] = required()


class WorkoutFilter(Payload):
    """Filters for the available-workout search. All optional."""
    workout_id: Optional[str] = None
    coach_id: Optional[str] = None
    time_slot_id: Optional[str] = None
    date: Optional[Annotated[datetime, day("Invalid date format")]] = None


class BookingDay(Payload):
    date: Annotated[datetime, day("Date parameter is required")] = required()
