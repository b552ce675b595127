"""Response envelopes shared by every handler."""
import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from backend.config import ALLOWED_ORIGIN, IS_DEVELOPMENT
from backend.errors import HttpError, PayloadValidationError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": ALLOWED_ORIGIN,
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Requested-With",
}


def format_json_response(status_code: int, body: Dict[str, Any]) -> JSONResponse:
    """Wrap a body into a JSON response with the CORS headers attached."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, custom_encoder={ObjectId: str}),
        headers=CORS_HEADERS,
    )


def success_response(
    data: Any,
    message: Optional[str] = None,
    status_code: int = 200,
) -> JSONResponse:
    body = {"status": "success", "data": data}
    if message:
        body["message"] = message
    return format_json_response(status_code, body)


def format_error_response(error: Exception) -> JSONResponse:
    """Translate any exception into the error envelope."""
    if isinstance(error, PayloadValidationError):
        logger.warning("Validation error", extra={"errors": error.errors})
        return format_json_response(error.status, error.to_body())

    if isinstance(error, HttpError):
        logger.warning(
            f"HTTP exception: {error.message}",
            extra={"status": error.status, "details": error.details},
        )
        return format_json_response(error.status, error.to_body())

    logger.error("Unhandled error", exc_info=error)
    body = {"status": "error", "message": "Internal server error"}
    if IS_DEVELOPMENT:
        body["details"] = str(error)
    return format_json_response(500, body)
