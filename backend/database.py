"""MongoDB connection and document helpers."""
import json
import logging
from datetime import date, datetime
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from backend.config import DATA_DIR, MONGO_DB_NAME, MONGO_URI
from backend.errors import HttpError
from backend.models import TimeSlot

logger = logging.getLogger(__name__)

# Collection names
ADMIN_DETAILS = "AdminDetails"
ADMIN_EMAILS = "AdminEmails"
CLIENT_DETAILS = "ClientDetails"
COACH_DETAILS = "CoachDetails"
COACH_EMAILS = "CoachEmails"
WORKOUT_OPTIONS = "WorkoutOption"
USERS = "User"
TIME_SLOTS = "TimeSlot"
BOOKINGS = "Booking"
FEEDBACK = "Feedback"

# One client per warm Lambda container
_client: Optional[MongoClient] = None
# Indexes and default data are set up once per container
_prepared = False


def get_client() -> MongoClient:
    """Return the shared MongoClient, connecting on first use."""
    global _client
    if _client is None:
        if not MONGO_URI:
            raise RuntimeError("MONGO_URI environment variable is not defined")
        _client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=5000)
        logger.info("Connected to MongoDB")
    return _client


def close_client() -> None:
    global _client, _prepared
    if _client is not None:
        _client.close()
        _client = None
        _prepared = False
        logger.info("Disconnected from MongoDB")


def get_db() -> Database:
    """
    FastAPI dependency for the application database.

    The first call in a container creates the indexes and loads the default
    time slots; the Lambda handler runs with the app lifespan off.
    """
    global _prepared
    db = get_client()[MONGO_DB_NAME]
    if not _prepared:
        init_database(db)
        load_default_time_slots(db)
        _prepared = True
    return db


def init_database(db: Database) -> None:
    """Create the indexes the queries rely on."""
    db[USERS].create_index([("cognitoId", ASCENDING)])
    db[USERS].create_index([("email", ASCENDING)])
    db[ADMIN_EMAILS].create_index([("email", ASCENDING)], unique=True)
    db[COACH_EMAILS].create_index([("email", ASCENDING)], unique=True)
    db[BOOKINGS].create_index([("coachId", ASCENDING), ("date", ASCENDING)])
    db[BOOKINGS].create_index([("clientId", ASCENDING)])
    db[FEEDBACK].create_index([("recipientId", ASCENDING)])


def load_default_time_slots(db: Database) -> int:
    """Load the default time slots when the collection is empty.

    Returns the number of slots inserted.
    """
    slots_file = DATA_DIR / "time_slots.json"

    if not slots_file.exists():
        return 0
    if db[TIME_SLOTS].count_documents({}) > 0:
        return 0

    with open(slots_file) as f:
        data = json.load(f)

    slots = [
        TimeSlot(start_time=slot["startTime"], end_time=slot["endTime"]).to_document()
        for slot in data["timeSlots"]
    ]
    if slots:
        db[TIME_SLOTS].insert_many(slots)
    logger.info("Loaded default time slots", extra={"count": len(slots)})
    return len(slots)


def to_object_id(value: Any, label: str = "ID") -> ObjectId:
    """Convert a string id to ObjectId, raising a 400 when it is malformed."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise HttpError(400, f"Invalid {label} format")


def serialize_document(value: Any) -> Any:
    """Make a document JSON friendly: ObjectId -> str, datetime -> ISO string."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(item) for item in value]
    return value
