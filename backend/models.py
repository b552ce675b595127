"""Document models for the MongoDB collections, plus API models."""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    CLIENT = "client"
    COACH = "coach"
    ADMIN = "admin"


class BookingState(str, Enum):
    SCHEDULED = "SCHEDULED"
    WAITING_FOR_FEEDBACK = "WAITING_FOR_FEEDBACK"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


# A slot is taken while a booking on it is in one of these states
ACTIVE_BOOKING_STATES = [
    BookingState.SCHEDULED.value,
    BookingState.WAITING_FOR_FEEDBACK.value,
    BookingState.COMPLETED.value,
]


class UserTarget(str, Enum):
    LOSE_WEIGHT = "LOSE_WEIGHT"
    GAIN_WEIGHT = "GAIN_WEIGHT"
    IMPROVE_FLEXIBILITY = "IMPROVE_FLEXIBILITY"
    GENERAL_FITNESS = "GENERAL_FITNESS"
    BUILD_MUSCLE = "BUILD_MUSCLE"
    REHABILITATION = "REHABILITATION"


class UserPreferableActivity(str, Enum):
    YOGA = "YOGA"
    PILATES = "PILATES"
    CLIMBING = "CLIMBING"
    STRENGTH_TRAINING = "STRENGTH_TRAINING"
    CROSS_FIT = "CROSS_FIT"
    CARDIO_TRAINING = "CARDIO_TRAINING"
    REHABILITATION = "REHABILITATION"


class Document(BaseModel):
    """Base for persisted documents. Attributes are snake_case, stored camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_default=True,
    )

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class AdminDetails(Document):
    phone_number: int


class AdminEmail(Document):
    email: str


class ClientDetails(Document):
    target: str
    preferred_activity: str


class CoachDetails(Document):
    specialization: List[ObjectId] = Field(default_factory=list)  # WorkoutOption ids
    title: str = ""
    about: str = ""
    rating: float = 0
    certificates: List[Any] = Field(default_factory=list)
    working_days: List[str] = Field(default_factory=list)  # ['Monday', 'Wednesday']


class CoachEmail(Document):
    email: str


class WorkoutOption(Document):
    name: str
    coaches_id: List[ObjectId] = Field(default_factory=list)  # User ids


class User(Document):
    cognito_id: str
    first_name: str
    last_name: str
    email: str
    role: UserRole = UserRole.CLIENT
    gym: Optional[ObjectId] = None  # None for admin
    image: str = ""
    client_id: Optional[ObjectId] = None
    coach_id: Optional[ObjectId] = None
    admin_id: Optional[ObjectId] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def to_document(self) -> Dict[str, Any]:
        # Only the details reference matching the role is stored
        return self.model_dump(by_alias=True, exclude_none=True)


class TimeSlot(Document):
    start_time: str
    end_time: str


class Booking(Document):
    client_id: ObjectId
    coach_id: ObjectId
    workout_id: ObjectId
    time_slot_id: ObjectId
    date: datetime
    state: BookingState = BookingState.SCHEDULED
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Feedback(Document):
    user_id: ObjectId  # author
    recipient_id: ObjectId
    booking_id: ObjectId
    message: str
    rating: float
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class AuthenticatedUser(BaseModel):
    """Identity attached to a request once the access token is verified."""
    cognito_id: str
    email: str
    role: UserRole
    user_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
