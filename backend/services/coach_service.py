"""Coach listings, details and availability."""
import logging
from datetime import datetime
from typing import Any, Dict, List

from bson import ObjectId
from pymongo.database import Database
from pymongo.errors import PyMongoError

from backend.database import (
    COACH_DETAILS,
    TIME_SLOTS,
    USERS,
    WORKOUT_OPTIONS,
    serialize_document,
    to_object_id,
)
from backend.errors import HttpError
from backend.models import UserRole
from backend.services.workout_service import WorkoutService
from backend.storage import image_url

logger = logging.getLogger(__name__)


class CoachService:
    def __init__(self, db: Database):
        self.db = db
        self.workout_service = WorkoutService(db)

    def get_all_coaches(self) -> List[Dict[str, Any]]:
        """All coaches with their details and specialization names."""
        try:
            coaches = list(self.db[USERS].find({"role": UserRole.COACH.value}))
            details = {
                d["_id"]: d
                for d in self.db[COACH_DETAILS].find(
                    {"_id": {"$in": [c["coachId"] for c in coaches if c.get("coachId")]}}
                )
            }
            option_ids = [oid for d in details.values() for oid in d.get("specialization", [])]
            options = {
                o["_id"]: o for o in self.db[WORKOUT_OPTIONS].find({"_id": {"$in": option_ids}})
            }
        except PyMongoError as e:
            logger.exception("Error fetching all coaches")
            raise HttpError(500, "Failed to fetch coaches") from e

        result = []
        for coach in coaches:
            detail = details.get(coach.get("coachId"), {})
            result.append(
                {
                    "id": coach["_id"],
                    "firstName": coach["firstName"],
                    "lastName": coach["lastName"],
                    "email": coach["email"],
                    "image": image_url(coach.get("image", "")),
                    "gym": coach.get("gym"),
                    "specializations": [
                        {"value": oid, "label": options[oid]["name"]}
                        for oid in detail.get("specialization", [])
                        if oid in options
                    ],
                    "title": detail.get("title", ""),
                    "about": detail.get("about", ""),
                    "rating": detail.get("rating", 0),
                    "workingDays": detail.get("workingDays", []),
                }
            )
        return serialize_document(result)

    def get_coach_by_id(self, coach_id: str) -> Dict[str, Any]:
        coach = self.db[USERS].find_one(
            {"_id": to_object_id(coach_id, "coach ID"), "role": UserRole.COACH.value}
        )
        if not coach:
            raise HttpError(404, "Coach not found")

        detail = {}
        if coach.get("coachId"):
            detail = self.db[COACH_DETAILS].find_one({"_id": coach["coachId"]}) or {}

        options = []
        if detail.get("specialization"):
            options = list(self.db[WORKOUT_OPTIONS].find({"_id": {"$in": detail["specialization"]}}))

        return serialize_document(
            {
                "id": coach["_id"],
                "firstName": coach["firstName"],
                "lastName": coach["lastName"],
                "email": coach["email"],
                "image": image_url(coach.get("image", "")),
                "gym": coach.get("gym"),
                "specializations": [{"value": o["_id"], "label": o["name"]} for o in options],
                "title": detail.get("title", ""),
                "about": detail.get("about", ""),
                "rating": detail.get("rating", 0),
                "certificates": detail.get("certificates", []),
                "workingDays": detail.get("workingDays", []),
            }
        )

    def get_coach_available_time_slots(self, coach_id: ObjectId, date: datetime) -> List[Dict[str, Any]]:
        if not self.db[USERS].find_one({"_id": coach_id, "role": UserRole.COACH.value}):
            raise HttpError(404, "Coach not found")
        if not self.db[TIME_SLOTS].count_documents({}):
            raise HttpError(404, "No time slots available")

        slots = self.workout_service.get_available_slots(coach_id, date)
        logger.debug("Slots with booking status", extra={"coachId": str(coach_id), "slots": slots})
        return slots

    def get_user_bookings_for_day(
        self,
        user_id: ObjectId,
        date: datetime,
        role: UserRole,
    ) -> List[Dict[str, Any]]:
        logger.info(
            "Searching bookings for day",
            extra={"userId": str(user_id), "date": date.isoformat(), "role": role},
        )
        if role not in (UserRole.CLIENT, UserRole.COACH):
            raise HttpError(403, "Unauthorized access")
        return self.workout_service.get_bookings_for_user(user_id, date)
