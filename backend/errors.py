"""Exceptions translated into HTTP error envelopes."""
from typing import Any, Dict, List


class HttpError(Exception):
    """An error that carries the HTTP status the client should see."""

    def __init__(self, status: int, message: str, details: Any = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.details = details

    def to_body(self) -> Dict[str, Any]:
        body = {"status": "error", "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class PayloadValidationError(HttpError):
    """Raised when a payload fails its schema. Details list every failing field."""

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed"):
        super().__init__(400, message, errors)
        self.errors = errors

    @property
    def messages(self) -> List[str]:
        return [error["message"] for error in self.errors]
