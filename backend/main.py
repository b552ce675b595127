"""FastAPI application entry point."""
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from backend.api.coaches import bookings_router
from backend.api.coaches import router as coaches_router
from backend.api.feedback import router as feedback_router
from backend.api.profile import router as profile_router
from backend.api.users import router as users_router
from backend.api.workouts import admin_router
from backend.api.workouts import router as workouts_router
from backend.config import ALLOWED_ORIGIN
from backend.database import close_client, get_db
from backend.errors import HttpError, PayloadValidationError
from backend.logging_config import format_for_logging, request_id_var, setup_logging
from backend.models import HealthResponse
from backend.responses import format_error_response

VERSION = "0.1.0"

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        get_db()
    except (RuntimeError, PyMongoError):
        # Requests that need the database will fail on their own
        logger.exception("Database initialization failed")
    yield
    close_client()


# Initialize FastAPI app
app = FastAPI(
    title="Gym Booking API",
    description="Coach booking, workout options and feedback for a gym",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[ALLOWED_ORIGIN],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag every log line with a request id and log the request and its outcome."""
    request_id = request.headers.get("x-amzn-requestid") or str(uuid.uuid4())
    token = request_id_var.set(request_id)
    start = time.perf_counter()
    try:
        logger.info(
            "Request received",
            extra={
                "method": request.method,
                "path": request.url.path,
                "query": format_for_logging(dict(request.query_params)),
            },
        )
        response = await call_next(request)
        logger.info(
            "Request completed",
            extra={
                "path": request.url.path,
                "statusCode": response.status_code,
                "durationMs": round((time.perf_counter() - start) * 1000, 1),
            },
        )
        response.headers["x-request-id"] = request_id
        return response
    finally:
        request_id_var.reset(token)


@app.exception_handler(HttpError)
async def http_error_handler(request: Request, exc: HttpError):
    # Raised from dependencies (auth, role checks) before a handler's own try block
    return format_error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err["loc"][1:]) or "body", "message": err["msg"]}
        for err in exc.errors()
    ]
    return format_error_response(PayloadValidationError(errors))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    return format_error_response(exc)


# Include routers
app.include_router(coaches_router)
app.include_router(bookings_router)
app.include_router(workouts_router)
app.include_router(admin_router)
app.include_router(feedback_router)
app.include_router(profile_router)
app.include_router(users_router)


# Health check
@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="healthy", version=VERSION)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.main:app", host="0.0.0.0", port=8000, reload=True)
