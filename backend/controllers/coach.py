"""Coach controller."""
import logging
from datetime import datetime

from bson import ObjectId
from pymongo.database import Database

from backend.controllers.operation import logged_operation
from backend.models import UserRole
from backend.services.coach_service import CoachService

logger = logging.getLogger(__name__)


class CoachController:
    def __init__(self, db: Database):
        self.coach_service = CoachService(db)

    def get_all_coaches(self):
        with logged_operation(logger, "Getting all coaches"):
            return self.coach_service.get_all_coaches()

    def get_coach_by_id(self, coach_id: str):
        with logged_operation(logger, "Getting coach profile", coachId=coach_id):
            return self.coach_service.get_coach_by_id(coach_id)

    def get_coach_available_time_slots(self, coach_id: ObjectId, date: datetime):
        with logged_operation(
            logger, "Getting coach available time slots",
            coachId=str(coach_id), date=date.isoformat(),
        ):
            return self.coach_service.get_coach_available_time_slots(coach_id, date)

    def get_user_bookings_for_day(self, user_id: ObjectId, date: datetime, role: UserRole):
        with logged_operation(
            logger, "Getting user bookings for day",
            userId=str(user_id), date=date.isoformat(), role=role.value,
        ):
            return self.coach_service.get_user_bookings_for_day(user_id, date, role)
