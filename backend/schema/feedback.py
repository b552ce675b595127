"""Feedback payloads."""
from enum import Enum
from typing import Annotated

from pydantic import Field

from backend.schema.validation import Payload, number_between, required, text


class FeedbackSort(str, Enum):
    NEWEST = "timestamp"
    OLDEST = "timestamp_asc"
    HIGHEST_RATED = "rating"
    LOWEST_RATED = "rating_asc"


class AddFeedback(Payload):
    booking_id: Annotated[str, text("Booking ID is required")] = required()
    message: Annotated[str, text("Message is required")] = required()
    rating: Annotated[float, number_between(1, 5, "Rating must be between 1 and 5")] = required()


class FeedbackQuery(Payload):
    """Query string for a coach's feedback. Values arrive as strings."""
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=10, ge=1, le=100)
    sort_by: FeedbackSort = FeedbackSort.NEWEST
