"""Feedback left after a workout."""
import logging
import math
from typing import Any, Dict

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from backend.database import (
    BOOKINGS,
    COACH_DETAILS,
    FEEDBACK,
    USERS,
    serialize_document,
)
from backend.errors import HttpError
from backend.models import BookingState, Feedback, UserRole
from backend.schema.feedback import FeedbackSort
from backend.services.workout_service import WorkoutService
from backend.storage import image_url

logger = logging.getLogger(__name__)

SORTS = {
    FeedbackSort.NEWEST: [("timestamp", DESCENDING), ("_id", DESCENDING)],
    FeedbackSort.OLDEST: [("timestamp", ASCENDING), ("_id", ASCENDING)],
    FeedbackSort.HIGHEST_RATED: [("rating", DESCENDING), ("timestamp", DESCENDING)],
    FeedbackSort.LOWEST_RATED: [("rating", ASCENDING), ("timestamp", DESCENDING)],
}

# Feedback may be left once the workout day is over
FEEDBACK_STATES = [BookingState.WAITING_FOR_FEEDBACK.value, BookingState.COMPLETED.value]


class FeedbackService:
    def __init__(self, db: Database):
        self.db = db
        self.workout_service = WorkoutService(db)

    def add_feedback(
        self,
        user_id: ObjectId,
        booking_id: ObjectId,
        message: str,
        rating: float,
    ) -> Dict[str, Any]:
        # A workout day that has passed may not have been marked as finished yet
        self.workout_service.refresh_booking_states({"_id": booking_id})
        booking = self.db[BOOKINGS].find_one({"_id": booking_id})
        if not booking:
            raise HttpError(404, "Booking not found")

        if user_id == booking["clientId"]:
            recipient_id = booking["coachId"]
        elif user_id == booking["coachId"]:
            recipient_id = booking["clientId"]
        else:
            raise HttpError(403, "You can only leave feedback for your own bookings")

        if booking["state"] not in FEEDBACK_STATES:
            raise HttpError(400, "Feedback can only be left for a finished workout")

        if self.db[FEEDBACK].find_one({"bookingId": booking_id, "userId": user_id}):
            raise HttpError(409, "Feedback already submitted for this booking")

        feedback = Feedback(
            user_id=user_id,
            recipient_id=recipient_id,
            booking_id=booking_id,
            message=message,
            rating=rating,
        ).to_document()
        feedback["_id"] = self.db[FEEDBACK].insert_one(feedback).inserted_id

        if user_id == booking["clientId"]:
            self.db[BOOKINGS].update_one(
                {"_id": booking_id}, {"$set": {"state": BookingState.COMPLETED.value}}
            )
            self.update_coach_rating(recipient_id)

        logger.info(
            "Feedback added",
            extra={"bookingId": str(booking_id), "userId": str(user_id), "rating": rating},
        )
        return serialize_document(feedback)

    def update_coach_rating(self, coach_id: ObjectId) -> float:
        """Set the coach's rating to the mean of the ratings they received."""
        ratings = [f["rating"] for f in self.db[FEEDBACK].find({"recipientId": coach_id}, {"rating": 1})]
        average = round(sum(ratings) / len(ratings), 1) if ratings else 0
        coach = self.db[USERS].find_one({"_id": coach_id}, {"coachId": 1})
        if coach and coach.get("coachId"):
            self.db[COACH_DETAILS].update_one({"_id": coach["coachId"]}, {"$set": {"rating": average}})
        return average

    def get_feedback_for_user_coach(
        self,
        coach_id: ObjectId,
        per_page: int = 10,
        page: int = 1,
        sort_by: FeedbackSort = FeedbackSort.NEWEST,
    ) -> Dict[str, Any]:
        if not self.db[USERS].find_one({"_id": coach_id, "role": UserRole.COACH.value}):
            raise HttpError(404, "Coach not found")

        query = {"recipientId": coach_id}
        ratings = [f["rating"] for f in self.db[FEEDBACK].find(query, {"rating": 1})]
        total = len(ratings)

        entries = list(
            self.db[FEEDBACK]
            .find(query)
            .sort(SORTS[FeedbackSort(sort_by)])
            .skip((page - 1) * per_page)
            .limit(per_page)
        )
        authors = {
            u["_id"]: u
            for u in self.db[USERS].find(
                {"_id": {"$in": [e["userId"] for e in entries]}},
                {"firstName": 1, "lastName": 1, "image": 1},
            )
        }

        feedback = []
        for entry in entries:
            author = authors.get(entry["userId"], {})
            feedback.append(
                {
                    "feedbackId": entry["_id"],
                    "bookingId": entry["bookingId"],
                    "userId": entry["userId"],
                    "message": entry["message"],
                    "rating": entry["rating"],
                    "timestamp": entry["timestamp"],
                    "from": {
                        "id": entry["userId"],
                        "name": f"{author.get('firstName', '')} {author.get('lastName', '')}".strip(),
                        "image": image_url(author.get("image", "")),
                    },
                }
            )

        return serialize_document(
            {
                "feedback": feedback,
                "currentPage": page,
                "totalPages": math.ceil(total / per_page) if total else 0,
                "total": total,
                "averageRating": round(sum(ratings) / total, 1) if total else 0,
            }
        )
