"""Workout options, coach mappings and bookings."""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database

from backend.dates import day_bounds
from backend.database import (
    BOOKINGS,
    COACH_DETAILS,
    TIME_SLOTS,
    USERS,
    WORKOUT_OPTIONS,
    serialize_document,
    to_object_id,
)
from backend.errors import HttpError
from backend.models import (
    ACTIVE_BOOKING_STATES,
    Booking,
    BookingState,
    UserRole,
    WorkoutOption,
)
from backend.schema.booking import WorkoutFilter
from backend.storage import image_url

logger = logging.getLogger(__name__)

USER_SUMMARY = {"email": 1, "firstName": 1, "lastName": 1, "image": 1, "role": 1}


class WorkoutService:
    def __init__(self, db: Database):
        self.db = db

    # Workout options

    def create_workout_option(self, name: str, coaches_id: Optional[List[ObjectId]] = None) -> Dict[str, Any]:
        option = WorkoutOption(name=name, coaches_id=coaches_id or []).to_document()
        option["_id"] = self.db[WORKOUT_OPTIONS].insert_one(option).inserted_id
        logger.info("Workout option created", extra={"workoutName": name})
        return serialize_document(option)

    def get_all_workout_options(self) -> List[Dict[str, Any]]:
        """All options, with the coach references resolved to user summaries."""
        options = list(self.db[WORKOUT_OPTIONS].find().sort("name"))
        coach_ids = {oid for option in options for oid in option.get("coachesId", [])}
        coaches = {
            coach["_id"]: coach
            for coach in self.db[USERS].find({"_id": {"$in": list(coach_ids)}}, USER_SUMMARY)
        }
        for option in options:
            option["coachesId"] = [
                coaches[oid] for oid in option.get("coachesId", []) if oid in coaches
            ]
        return serialize_document(options)

    def create_mappings(self, coach_id: str, workout_ids: List[str]) -> List[Dict[str, Any]]:
        """Register a coach on each workout option and add them to the coach's specialization."""
        coach = self._get_coach(to_object_id(coach_id, "coach ID"))
        option_ids = [to_object_id(value, "workout ID") for value in workout_ids]

        found = {
            option["_id"]
            for option in self.db[WORKOUT_OPTIONS].find({"_id": {"$in": option_ids}}, {"_id": 1})
        }
        missing = [str(oid) for oid in option_ids if oid not in found]
        if missing:
            raise HttpError(404, "Workout option not found", missing)

        self.db[WORKOUT_OPTIONS].update_many(
            {"_id": {"$in": option_ids}}, {"$addToSet": {"coachesId": coach["_id"]}}
        )
        if coach.get("coachId"):
            self.db[COACH_DETAILS].update_one(
                {"_id": coach["coachId"]},
                {"$addToSet": {"specialization": {"$each": option_ids}}},
            )

        logger.info(
            "Mapped workouts to coach",
            extra={"coachId": coach_id, "workoutIds": workout_ids},
        )
        return serialize_document(list(self.db[WORKOUT_OPTIONS].find({"_id": {"$in": option_ids}})))

    def get_coaches_by_workout(self, workout_id: str) -> List[Dict[str, Any]]:
        option = self._get_option(to_object_id(workout_id, "workout ID"))
        coaches = self.db[USERS].find(
            {"_id": {"$in": option.get("coachesId", [])}, "role": UserRole.COACH.value}
        )
        return serialize_document(list(coaches))

    # Bookings

    def book_workout(
        self,
        client_id: ObjectId,
        workout_id: ObjectId,
        coach_id: ObjectId,
        time_slot_id: ObjectId,
        date: datetime,
    ) -> Dict[str, Any]:
        option = self._get_option(workout_id)
        coach = self._get_coach(coach_id)
        if coach["_id"] not in option.get("coachesId", []):
            raise HttpError(400, "Coach does not offer this workout")

        if not self.db[TIME_SLOTS].find_one({"_id": time_slot_id}):
            raise HttpError(404, "Time slot not found")

        start, end = day_bounds(date)
        if start < day_bounds(datetime.utcnow())[0]:
            raise HttpError(400, "Cannot book a workout in the past")

        slot_filter = {
            "timeSlotId": time_slot_id,
            "date": {"$gte": start, "$lt": end},
            "state": {"$in": ACTIVE_BOOKING_STATES},
        }
        if self.db[BOOKINGS].find_one({**slot_filter, "coachId": coach_id}):
            raise HttpError(409, "Time slot is already booked")
        if self.db[BOOKINGS].find_one({**slot_filter, "clientId": client_id}):
            raise HttpError(409, "You already have a workout booked at this time")

        booking = Booking(
            client_id=client_id,
            coach_id=coach_id,
            workout_id=workout_id,
            time_slot_id=time_slot_id,
            date=start,
        ).to_document()
        booking["_id"] = self.db[BOOKINGS].insert_one(booking).inserted_id

        logger.info(
            "Workout booked",
            extra={"bookingId": str(booking["_id"]), "clientId": str(client_id)},
        )
        return self._booking_views([booking])[0]

    def cancel_booking(self, user_id: ObjectId, booking_id: ObjectId) -> Dict[str, Any]:
        booking = self.db[BOOKINGS].find_one({"_id": booking_id})
        if not booking:
            raise HttpError(404, "Booking not found")
        if booking["clientId"] != user_id:
            raise HttpError(403, "You can only cancel your own bookings")
        if booking["state"] != BookingState.SCHEDULED.value:
            raise HttpError(400, f"Booking cannot be cancelled in state {booking['state']}")

        self.db[BOOKINGS].update_one(
            {"_id": booking_id}, {"$set": {"state": BookingState.CANCELED.value}}
        )
        booking["state"] = BookingState.CANCELED.value
        logger.info("Booking cancelled", extra={"bookingId": str(booking_id)})
        return self._booking_views([booking])[0]

    def get_all_bookings_for_user(self, user_id: ObjectId) -> List[Dict[str, Any]]:
        query = self._bookings_query(user_id)
        self.refresh_booking_states(query)
        bookings = list(self.db[BOOKINGS].find(query).sort("date", DESCENDING))
        return self._booking_views(bookings)

    def get_bookings_for_user(self, user_id: ObjectId, date: datetime) -> List[Dict[str, Any]]:
        start, end = day_bounds(date)
        query = self._bookings_query(user_id)
        query["date"] = {"$gte": start, "$lt": end}
        self.refresh_booking_states(query)
        bookings = list(self.db[BOOKINGS].find(query))
        return self._booking_views(bookings)

    def refresh_booking_states(self, query: Dict[str, Any]) -> int:
        """Move scheduled bookings from past days to WAITING_FOR_FEEDBACK."""
        today = day_bounds(datetime.utcnow())[0]
        stale = [
            booking["_id"]
            for booking in self.db[BOOKINGS].find(
                {**query, "state": BookingState.SCHEDULED.value}, {"date": 1}
            )
            if booking["date"] < today
        ]
        if not stale:
            return 0
        self.db[BOOKINGS].update_many(
            {"_id": {"$in": stale}},
            {"$set": {"state": BookingState.WAITING_FOR_FEEDBACK.value}},
        )
        return len(stale)

    def get_available_slots(self, coach_id: ObjectId, date: datetime) -> List[Dict[str, Any]]:
        """Every time slot, flagged with whether the coach is booked on it that day."""
        start, end = day_bounds(date)
        booked = {
            booking["timeSlotId"]
            for booking in self.db[BOOKINGS].find(
                {
                    "coachId": coach_id,
                    "date": {"$gte": start, "$lt": end},
                    "state": {"$in": ACTIVE_BOOKING_STATES},
                },
                {"timeSlotId": 1},
            )
        }
        return [
            {
                "id": str(slot["_id"]),
                "startTime": slot["startTime"],
                "endTime": slot["endTime"],
                "isBooked": slot["_id"] in booked,
            }
            for slot in self.db[TIME_SLOTS].find().sort("startTime")
        ]

    def search_workout_using_filters(self, filters: WorkoutFilter) -> List[Dict[str, Any]]:
        """Coaches offering a workout, with their free slots on the requested day."""
        option_query = {}
        if filters.workout_id:
            option_query["_id"] = to_object_id(filters.workout_id, "workout ID")
        coach_id = to_object_id(filters.coach_id, "coach ID") if filters.coach_id else None
        time_slot_id = to_object_id(filters.time_slot_id, "time slot ID") if filters.time_slot_id else None
        date = filters.date or day_bounds(datetime.utcnow())[0]

        results = []
        for option in self.db[WORKOUT_OPTIONS].find(option_query).sort("name"):
            coach_ids = option.get("coachesId", [])
            if coach_id is not None:
                coach_ids = [oid for oid in coach_ids if oid == coach_id]

            for coach in self.db[USERS].find({"_id": {"$in": coach_ids}, "role": UserRole.COACH.value}):
                details = self.db[COACH_DETAILS].find_one({"_id": coach.get("coachId")}) or {}
                slots = [
                    slot for slot in self.get_available_slots(coach["_id"], date)
                    if not slot["isBooked"] and (time_slot_id is None or slot["id"] == str(time_slot_id))
                ]
                if not slots:
                    continue
                results.append(
                    {
                        "coachId": str(coach["_id"]),
                        "coachName": f"{coach['firstName']} {coach['lastName']}",
                        "image": image_url(coach.get("image", "")),
                        "title": details.get("title", ""),
                        "rating": details.get("rating", 0),
                        "workoutId": str(option["_id"]),
                        "workoutName": option["name"],
                        "date": date.isoformat(),
                        "availableSlots": [
                            {"id": s["id"], "startTime": s["startTime"], "endTime": s["endTime"]}
                            for s in slots
                        ],
                    }
                )
        return results

    # Helpers

    def _get_option(self, workout_id: ObjectId) -> Dict[str, Any]:
        option = self.db[WORKOUT_OPTIONS].find_one({"_id": workout_id})
        if not option:
            raise HttpError(404, "Workout option not found")
        return option

    def _get_coach(self, coach_id: ObjectId) -> Dict[str, Any]:
        coach = self.db[USERS].find_one({"_id": coach_id, "role": UserRole.COACH.value})
        if not coach:
            raise HttpError(404, "Coach not found")
        return coach

    def _bookings_query(self, user_id: ObjectId) -> Dict[str, Any]:
        user = self.db[USERS].find_one({"_id": user_id}, {"role": 1})
        if not user:
            raise HttpError(404, "User not found")
        if user["role"] == UserRole.COACH.value:
            return {"coachId": user_id}
        if user["role"] == UserRole.CLIENT.value:
            return {"clientId": user_id}
        raise HttpError(403, "Unauthorized access")

    def _booking_views(self, bookings: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Resolve a page of bookings into the shape the client renders."""
        user_ids = {b["clientId"] for b in bookings} | {b["coachId"] for b in bookings}
        users = {u["_id"]: u for u in self.db[USERS].find({"_id": {"$in": list(user_ids)}}, USER_SUMMARY)}
        options = {
            o["_id"]: o
            for o in self.db[WORKOUT_OPTIONS].find({"_id": {"$in": [b["workoutId"] for b in bookings]}})
        }
        slots = {
            s["_id"]: s
            for s in self.db[TIME_SLOTS].find({"_id": {"$in": [b["timeSlotId"] for b in bookings]}})
        }

        def person(user_id: ObjectId) -> Dict[str, Any]:
            user = users.get(user_id, {})
            return {
                "id": user_id,
                "firstName": user.get("firstName", ""),
                "lastName": user.get("lastName", ""),
                "image": image_url(user.get("image", "")),
            }

        views = []
        for booking in bookings:
            option = options.get(booking["workoutId"], {})
            slot = slots.get(booking["timeSlotId"], {})
            views.append(
                {
                    "bookingId": booking["_id"],
                    "date": booking["date"],
                    "state": booking["state"],
                    "activity": {"id": booking["workoutId"], "name": option.get("name", "")},
                    "coach": person(booking["coachId"]),
                    "client": person(booking["clientId"]),
                    "timeSlot": {
                        "id": booking["timeSlotId"],
                        "startTime": slot.get("startTime", ""),
                        "endTime": slot.get("endTime", ""),
                    },
                }
            )
        return serialize_document(views)
