"""Payload validation shared by every schema."""
from datetime import datetime
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from backend.dates import parse_booking_date
from backend.errors import PayloadValidationError

T = TypeVar("T", bound=BaseModel)


class Payload(BaseModel):
    """Base for inbound payloads: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def required(**kwargs) -> Any:
    """A field whose absence is reported with the field's own message.

    The default None is validated, so a missing key goes through the same
    validator as an empty value instead of pydantic's generic "Field required".
    """
    return Field(default=None, validate_default=True, **kwargs)


def text(message: str, min_length: int = 1) -> BeforeValidator:
    """A string of at least min_length characters."""
    def check(value: Any) -> str:
        if not isinstance(value, str) or len(value) < min_length:
            raise PydanticCustomError("text", message)
        return value
    return BeforeValidator(check)


def number_between(low: float, high: float, message: str) -> BeforeValidator:
    def check(value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PydanticCustomError("number", message)
        if not low <= value <= high:
            raise PydanticCustomError("number_range", message)
        return value
    return BeforeValidator(check)


def day(message: str = "Invalid date format") -> BeforeValidator:
    """A booking day, normalized to midnight."""
    def check(value: Any) -> datetime:
        try:
            return parse_booking_date(value)
        except (TypeError, ValueError):
            raise PydanticCustomError("date", message)
    return BeforeValidator(check)


def format_errors(error: ValidationError) -> List[Dict[str, str]]:
    """One entry per failing field, in schema order."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "body",
            "message": err["msg"],
        }
        for err in error.errors()
    ]


def validate_payload(schema: Type[T], payload: Any) -> T:
    """Validate payload against schema, reporting every violated constraint."""
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise PayloadValidationError(
            [{"field": "body", "message": "Request body must be a JSON object"}]
        )
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise PayloadValidationError(format_errors(e))
