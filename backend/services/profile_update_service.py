"""Profile updates for each role."""
import logging
from datetime import datetime
from typing import Any, Dict

from pymongo.database import Database

from backend.database import (
    ADMIN_DETAILS,
    CLIENT_DETAILS,
    COACH_DETAILS,
    USERS,
    WORKOUT_OPTIONS,
    to_object_id,
)
from backend.errors import HttpError
from backend.models import UserRole
from backend.schema.preferences import (
    AdminPreference,
    BaseUserPreference,
    ClientPreference,
    CoachPreference,
)
from backend.services.user_service import UserService

logger = logging.getLogger(__name__)


class ProfileUpdateService:
    def __init__(self, db: Database):
        self.db = db
        self.users = UserService(db)

    def _find_user(self, cognito_id: str, role: UserRole, reference: str) -> Dict[str, Any]:
        user = self.db[USERS].find_one({"cognitoId": cognito_id, "role": role.value})
        label = role.value.capitalize()
        if not user or not user.get(reference):
            logger.warning(f"{label} not found", extra={"cognitoId": cognito_id})
            raise HttpError(404, f"{label} not found")
        return user

    def _update_base_fields(self, user: Dict[str, Any], update: BaseUserPreference) -> None:
        fields = {}
        if update.first_name:
            fields["firstName"] = update.first_name
        if update.last_name:
            fields["lastName"] = update.last_name
        if update.image:
            fields["image"] = update.image
        if fields:
            fields["updatedAt"] = datetime.utcnow()
            self.db[USERS].update_one({"_id": user["_id"]}, {"$set": fields})
            logger.info("Updated base user fields", extra={"cognitoId": user["cognitoId"]})

    def update_client_profile(self, cognito_id: str, update: ClientPreference) -> Dict[str, Any]:
        logger.info("Updating client profile", extra={"cognitoId": cognito_id})
        user = self._find_user(cognito_id, UserRole.CLIENT, "clientId")
        self._update_base_fields(user, update)

        fields = {}
        if update.target:
            fields["target"] = update.target
        if update.preferred_activity:
            fields["preferredActivity"] = update.preferred_activity
        if fields:
            self.db[CLIENT_DETAILS].update_one({"_id": user["clientId"]}, {"$set": fields})
            logger.info("Updated client specific fields", extra={"cognitoId": cognito_id})

        return self.users.get_user_profile_by_cognito_id(cognito_id)

    def update_coach_profile(self, cognito_id: str, update: CoachPreference) -> Dict[str, Any]:
        logger.info("Updating coach profile", extra={"cognitoId": cognito_id})
        user = self._find_user(cognito_id, UserRole.COACH, "coachId")
        self._update_base_fields(user, update)

        fields = {}
        if update.title:
            fields["title"] = update.title
        if update.about:
            fields["about"] = update.about
        if update.working_days is not None:
            fields["workingDays"] = update.working_days
        if update.specialization:
            fields["specialization"] = self._sync_specialization(user, update.specialization)
        if fields:
            self.db[COACH_DETAILS].update_one({"_id": user["coachId"]}, {"$set": fields})
            logger.info("Updated coach specific fields", extra={"cognitoId": cognito_id})

        return self.users.get_user_profile_by_cognito_id(cognito_id)

    def _sync_specialization(self, user: Dict[str, Any], specialization: list) -> list:
        """Keep WorkoutOption.coachesId in step with the coach's specialization list."""
        details = self.db[COACH_DETAILS].find_one({"_id": user["coachId"]})
        if not details:
            raise HttpError(404, "Coach data not found")

        new_ids = [to_object_id(value, "workout option ID") for value in specialization]
        found = self.db[WORKOUT_OPTIONS].count_documents({"_id": {"$in": new_ids}})
        if found != len(set(new_ids)):
            raise HttpError(404, "Workout option not found")

        removed = [oid for oid in details.get("specialization", []) if oid not in new_ids]
        if removed:
            self.db[WORKOUT_OPTIONS].update_many(
                {"_id": {"$in": removed}}, {"$pull": {"coachesId": user["_id"]}}
            )
        self.db[WORKOUT_OPTIONS].update_many(
            {"_id": {"$in": new_ids}}, {"$addToSet": {"coachesId": user["_id"]}}
        )
        return new_ids

    def update_admin_profile(self, cognito_id: str, update: AdminPreference) -> Dict[str, Any]:
        logger.info("Updating admin profile", extra={"cognitoId": cognito_id})
        user = self._find_user(cognito_id, UserRole.ADMIN, "adminId")
        self._update_base_fields(user, update)

        if update.phone_number is not None:
            self.db[ADMIN_DETAILS].update_one(
                {"_id": user["adminId"]}, {"$set": {"phoneNumber": update.phone_number}}
            )
            logger.info("Updated admin specific fields", extra={"cognitoId": cognito_id})

        return self.users.get_user_profile_by_cognito_id(cognito_id)
