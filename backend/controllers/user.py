"""User registration controller."""
import logging

from pymongo.database import Database

from backend.controllers.operation import logged_operation
from backend.schema.user import RegisterUser
from backend.services.user_service import UserService

logger = logging.getLogger(__name__)


class UserController:
    def __init__(self, db: Database):
        self.user_service = UserService(db)

    def register(self, cognito_id: str, email: str, registration: RegisterUser):
        with logged_operation(logger, "Registering user", cognitoId=cognito_id):
            return self.user_service.create_user(
                cognito_id=cognito_id,
                email=email,
                first_name=registration.first_name,
                last_name=registration.last_name,
                target=registration.target,
                preferred_activity=registration.preferred_activity,
            )
