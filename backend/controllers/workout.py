"""Workout controller: options, coach mappings and bookings."""
import logging
from datetime import datetime
from typing import List

from bson import ObjectId
from pymongo.database import Database

from backend.controllers.operation import logged_operation
from backend.schema.booking import WorkoutFilter
from backend.services.workout_service import WorkoutService

logger = logging.getLogger(__name__)


class WorkoutController:
    def __init__(self, db: Database):
        self.service = WorkoutService(db)

    def map_workouts_to_coach(self, coach_id: str, workout_ids: List[str]):
        with logged_operation(logger, "Mapping workouts to coach", coachId=coach_id):
            return self.service.create_mappings(coach_id, workout_ids)

    def fetch_coaches_for_workout(self, workout_id: str):
        with logged_operation(logger, "Fetching coaches for workout", workoutId=workout_id):
            return self.service.get_coaches_by_workout(workout_id)

    def book_workout(
        self,
        client_id: ObjectId,
        workout_id: ObjectId,
        coach_id: ObjectId,
        time_slot_id: ObjectId,
        date: datetime,
    ):
        with logged_operation(
            logger, "Booking workout",
            clientId=str(client_id), coachId=str(coach_id), date=date.isoformat(),
        ):
            return self.service.book_workout(client_id, workout_id, coach_id, time_slot_id, date)

    def cancel_workout(self, user_id: ObjectId, booking_id: ObjectId):
        with logged_operation(logger, "Cancelling workout", userId=str(user_id), bookingId=str(booking_id)):
            return self.service.cancel_booking(user_id, booking_id)

    def get_user_bookings(self, user_id: ObjectId):
        with logged_operation(logger, "Getting user bookings", userId=str(user_id)):
            return self.service.get_all_bookings_for_user(user_id)

    def create(self, name: str):
        with logged_operation(logger, "Creating workout option", workoutName=name):
            return self.service.create_workout_option(name)

    def get_all(self):
        with logged_operation(logger, "Getting workout options"):
            return self.service.get_all_workout_options()

    def get_filtered_coaches(self, filters: WorkoutFilter):
        with logged_operation(logger, "Searching available workouts", filters=filters.model_dump(mode="json")):
            return self.service.search_workout_using_filters(filters)
