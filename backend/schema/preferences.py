"""Profile update payloads, one per role."""
from typing import Annotated, List, Optional

from pydantic import BeforeValidator
from pydantic_core import PydanticCustomError

from backend.models import UserPreferableActivity, UserTarget
from backend.schema.validation import Payload, text


def one_of(enum, message: str) -> BeforeValidator:
    def check(value):
        try:
            return enum(value).value
        except ValueError:
            raise PydanticCustomError("enum", message)
    return BeforeValidator(check)


class BaseUserPreference(Payload):
    first_name: Optional[Annotated[str, text("First name is required")]] = None
    last_name: Optional[Annotated[str, text("Last name is required")]] = None
    current_password: Optional[str] = None
    password: Optional[Annotated[str, text("Password must be at least 8 characters long", min_length=8)]] = None
    confirm_password: Optional[Annotated[str, text("Confirm password is required", min_length=8)]] = None
    image: Optional[str] = None


class ClientPreference(BaseUserPreference):
    preferred_activity: Optional[Annotated[str, one_of(UserPreferableActivity, "Please select a valid activity")]] = None
    target: Optional[Annotated[str, one_of(UserTarget, "Please select a valid target")]] = None


class CoachPreference(BaseUserPreference):
    title: Optional[Annotated[str, text("Title is required")]] = None
    about: Optional[Annotated[str, text("About is required")]] = None
    specialization: Optional[List[str]] = None
    working_days: Optional[List[str]] = None


class AdminPreference(BaseUserPreference):
    phone_number: Optional[int] = None
