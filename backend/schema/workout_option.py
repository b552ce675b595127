"""Workout option payloads."""
from typing import Annotated, List

from pydantic import BeforeValidator
from pydantic_core import PydanticCustomError

from backend.schema.validation import Payload, required, text


def id_list(message: str) -> BeforeValidator:
    def check(value):
        if not isinstance(value, list) or not all(isinstance(item, str) and item for item in value):
            raise PydanticCustomError("id_list", message)
        return value
    return BeforeValidator(check)


class CreateWorkoutOption(Payload):
    name: Annotated[str, text("Workout name is required", min_length=2)] = required()


class WorkoutMapping(Payload):
    """Assign workout options to a coach."""
    coach_id: Annotated[str, text("Coach ID is required")] = required()
    workout_ids: Annotated[List[str], id_list("Workout IDs must be a list of IDs")] = required()
