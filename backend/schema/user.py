"""Registration payload, sent once after sign-up."""
from typing import Annotated, Optional

from backend.models import UserPreferableActivity, UserTarget
from backend.schema.preferences import one_of
from backend.schema.validation import Payload, required, text


class RegisterUser(Payload):
    first_name: Annotated[str, text("First name is required")] = required()
    last_name: Annotated[str, text("Last name is required")] = required()
    # Access tokens may not carry the email claim
    email: Optional[Annotated[str, text("Email is required")]] = None
    target: Optional[Annotated[str, one_of(UserTarget, "Please select a valid target")]] = None
    preferred_activity: Optional[Annotated[str, one_of(UserPreferableActivity, "Please select a valid activity")]] = None
