"""Profile controller: read and update profiles for every role."""
import logging

from pymongo.database import Database

from backend.controllers.operation import logged_operation
from backend.errors import HttpError
from backend.models import UserRole
from backend.schema.preferences import (
    AdminPreference,
    BaseUserPreference,
    ClientPreference,
    CoachPreference,
)
from backend.services.profile_update_service import ProfileUpdateService
from backend.services.user_service import UserService

logger = logging.getLogger(__name__)

PREFERENCE_SCHEMAS = {
    UserRole.CLIENT: ClientPreference,
    UserRole.COACH: CoachPreference,
    UserRole.ADMIN: AdminPreference,
}


class ProfileController:
    def __init__(self, db: Database):
        self.user_service = UserService(db)
        self.update_service = ProfileUpdateService(db)

    def get_profile(self, cognito_id: str):
        with logged_operation(logger, "Getting profile", cognitoId=cognito_id):
            return self.user_service.get_user_profile_by_cognito_id(cognito_id)

    def get_profile_by_id(self, user_id: str):
        with logged_operation(logger, "Getting profile by ID", userId=user_id):
            return self.user_service.get_user_profile_by_id(user_id)

    def get_client_profile(self, client_id: str):
        with logged_operation(logger, "Getting client profile", clientId=client_id):
            profile = self.user_service.get_user_profile_by_id(client_id)
            if profile["role"] != UserRole.CLIENT.value:
                raise HttpError(404, "Client not found")
            return profile

    def update_profile(self, cognito_id: str, role: UserRole, update: BaseUserPreference):
        updaters = {
            UserRole.CLIENT: self.update_service.update_client_profile,
            UserRole.COACH: self.update_service.update_coach_profile,
            UserRole.ADMIN: self.update_service.update_admin_profile,
        }
        with logged_operation(logger, "Updating profile", cognitoId=cognito_id, role=role.value):
            if role not in updaters:
                raise HttpError(400, "Unknown user role")
            return updaters[role](cognito_id, update)
