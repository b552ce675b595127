"""User accounts and role-specific profiles."""
import logging
from typing import Any, Dict, Optional

from pymongo.database import Database
from pymongo.errors import PyMongoError

from backend.database import (
    ADMIN_DETAILS,
    ADMIN_EMAILS,
    CLIENT_DETAILS,
    COACH_DETAILS,
    COACH_EMAILS,
    USERS,
    WORKOUT_OPTIONS,
    serialize_document,
    to_object_id,
)
from backend.errors import HttpError
from backend.models import (
    AdminDetails,
    ClientDetails,
    CoachDetails,
    User,
    UserRole,
)
from backend.storage import image_url

logger = logging.getLogger(__name__)

# Role -> (details collection, reference field on the user document)
ROLE_DETAILS = {
    UserRole.CLIENT.value: (CLIENT_DETAILS, "clientId"),
    UserRole.COACH.value: (COACH_DETAILS, "coachId"),
    UserRole.ADMIN.value: (ADMIN_DETAILS, "adminId"),
}


class UserService:
    def __init__(self, db: Database):
        self.db = db

    def determine_user_role(self, email: str) -> UserRole:
        """Coach if the email is on the coach list, admin if on the admin list, else client."""
        if not email:
            logger.warning("Role assignment failed: email is missing")
            raise HttpError(400, "Email is required for role determination")

        try:
            if self.db[COACH_EMAILS].find_one({"email": email}):
                logger.info(f"Role assigned: coach for email {email}")
                return UserRole.COACH
            if self.db[ADMIN_EMAILS].find_one({"email": email}):
                logger.info(f"Role assigned: admin for email {email}")
                return UserRole.ADMIN
        except PyMongoError:
            logger.exception("Error during role assignment")
            raise HttpError(500, "Error determining user role")

        logger.info(f"Role assigned: client for email {email}")
        return UserRole.CLIENT

    def create_user(
        self,
        cognito_id: str,
        email: str,
        first_name: str,
        last_name: str,
        target: Optional[str] = None,
        preferred_activity: Optional[str] = None,
        role: Optional[UserRole] = None,
        **details: Any,
    ) -> Dict[str, Any]:
        """Create the role details document, then the user pointing at it."""
        existing = self.db[USERS].find_one(
            {"$or": [{"email": email}, {"cognitoId": cognito_id}]}
        )
        if existing:
            raise HttpError(409, "User already exists in database")

        role = UserRole(role) if role else self.determine_user_role(email)

        if role == UserRole.CLIENT:
            document = ClientDetails(
                target=target or "",
                preferred_activity=preferred_activity or "",
            )
        elif role == UserRole.COACH:
            document = CoachDetails(**details)
        else:
            document = AdminDetails(phone_number=details.get("phone_number", 0))

        collection, reference = ROLE_DETAILS[role.value]
        try:
            details_id = self.db[collection].insert_one(document.to_document()).inserted_id
            user = User(
                cognito_id=cognito_id,
                email=email,
                first_name=first_name,
                last_name=last_name,
                role=role,
                **{reference: details_id},
            ).to_document()
            try:
                user["_id"] = self.db[USERS].insert_one(user).inserted_id
            except PyMongoError:
                self.db[collection].delete_one({"_id": details_id})
                raise
        except PyMongoError as e:
            logger.exception("Error creating user in database")
            raise HttpError(500, "Failed to create user in database") from e

        logger.info("User created", extra={"cognitoId": cognito_id, "role": role.value})
        return serialize_document(user)

    def get_user_by_cognito_id(self, cognito_id: str) -> Optional[Dict[str, Any]]:
        user = self.db[USERS].find_one({"cognitoId": cognito_id})
        return serialize_document(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        user = self.db[USERS].find_one({"email": email})
        return serialize_document(user) if user else None

    def get_user_profile_by_cognito_id(self, cognito_id: str) -> Dict[str, Any]:
        logger.info("Fetching user profile", extra={"cognitoId": cognito_id})
        user = self.db[USERS].find_one({"cognitoId": cognito_id})
        if not user:
            logger.warning("User not found", extra={"cognitoId": cognito_id})
            raise HttpError(404, "User not found")
        return self.build_profile(user)

    def get_user_profile_by_id(self, user_id: str) -> Dict[str, Any]:
        logger.info("Fetching user profile by ID", extra={"userId": user_id})
        user = self.db[USERS].find_one({"_id": to_object_id(user_id, "user ID")})
        if not user:
            logger.warning("User not found", extra={"userId": user_id})
            raise HttpError(404, "User not found")
        return self.build_profile(user)

    def build_profile(self, user: Dict[str, Any]) -> Dict[str, Any]:
        """Combine a user document with its role-specific details."""
        builders = {
            UserRole.CLIENT.value: self._client_profile,
            UserRole.COACH.value: self._coach_profile,
            UserRole.ADMIN.value: self._admin_profile,
        }
        builder = builders.get(user.get("role"))
        if builder is None:
            logger.warning("Unknown user role", extra={"role": user.get("role")})
            raise HttpError(400, "Unknown user role")
        return serialize_document(builder(user))

    def _details(self, user: Dict[str, Any], label: str) -> Dict[str, Any]:
        collection, reference = ROLE_DETAILS[user["role"]]
        if not user.get(reference):
            logger.warning(f"{label} data not found", extra={"userId": str(user["_id"])})
            raise HttpError(404, f"{label} data not found")

        details = self.db[collection].find_one({"_id": user[reference]})
        if not details:
            logger.warning(f"{label} details not found", extra={reference: str(user[reference])})
            raise HttpError(404, f"{label} details not found")
        return details

    @staticmethod
    def _base_profile(user: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": user["_id"],
            "cognitoId": user["cognitoId"],
            "firstName": user["firstName"],
            "lastName": user["lastName"],
            "email": user["email"],
            "role": user["role"],
            "gym": user.get("gym"),
            "image": image_url(user.get("image", "")),
        }

    def _client_profile(self, user: Dict[str, Any]) -> Dict[str, Any]:
        details = self._details(user, "Client")
        profile = self._base_profile(user)
        profile["target"] = details.get("target")
        profile["preferredActivity"] = details.get("preferredActivity")
        return profile

    def _coach_profile(self, user: Dict[str, Any]) -> Dict[str, Any]:
        details = self._details(user, "Coach")
        specializations = list(
            self.db[WORKOUT_OPTIONS].find({"_id": {"$in": details.get("specialization", [])}})
        )
        profile = self._base_profile(user)
        profile.update(
            {
                "specialization": [
                    {"label": option["name"], "value": str(option["_id"])}
                    for option in specializations
                ],
                "title": details.get("title", ""),
                "about": details.get("about", ""),
                "rating": details.get("rating", 0),
                "certificates": details.get("certificates", []),
                "workingDays": details.get("workingDays", []),
            }
        )
        return profile

    def _admin_profile(self, user: Dict[str, Any]) -> Dict[str, Any]:
        details = self._details(user, "Admin")
        profile = self._base_profile(user)
        # Admins don't belong to a gym
        profile.pop("gym")
        profile["phoneNumber"] = details.get("phoneNumber")
        return profile
