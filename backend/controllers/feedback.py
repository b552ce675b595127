"""Feedback controller."""
import logging

from bson import ObjectId
from pymongo.database import Database

from backend.controllers.operation import logged_operation
from backend.schema.feedback import FeedbackSort
from backend.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)


class FeedbackController:
    def __init__(self, db: Database):
        self.feedback_service = FeedbackService(db)

    def add_feedback(self, user_id: ObjectId, booking_id: ObjectId, message: str, rating: float):
        with logged_operation(logger, "Adding feedback", userId=str(user_id), bookingId=str(booking_id)):
            return self.feedback_service.add_feedback(user_id, booking_id, message, rating)

    def get_feedback_for_coach(self, coach_id: ObjectId, per_page: int, page: int, sort_by: FeedbackSort):
        with logged_operation(
            logger, "Getting feedback for coach",
            coachId=str(coach_id), page=page, perPage=per_page, sortBy=sort_by.value,
        ):
            return self.feedback_service.get_feedback_for_user_coach(coach_id, per_page, page, sort_by)
