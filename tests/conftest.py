"""Shared fixtures: an in-memory MongoDB, an API client and seed helpers."""
from datetime import date, datetime, timedelta

import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from backend.auth import get_token_claims
from backend.database import BOOKINGS, TIME_SLOTS, get_db, init_database, load_default_time_slots
from backend.errors import HttpError
from backend.main import app
from backend.models import Booking, BookingState, UserRole
from backend.services.user_service import UserService
from backend.services.workout_service import WorkoutService


@pytest.fixture
def db():
    database = mongomock.MongoClient()["gym_test"]
    init_database(database)
    load_default_time_slots(database)
    return database


@pytest.fixture
def claims():
    """Claims of the caller's access token. Empty means no token."""
    return {}


@pytest.fixture
def client(db, claims):
    async def fake_token_claims():
        if not claims:
            raise HttpError(401, "Missing Authorization header")
        return dict(claims)

    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_token_claims] = fake_token_claims
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(claims):
    """Make subsequent requests as the given user."""
    def _login(user):
        claims.clear()
        claims.update({"sub": user["cognitoId"], "username": user["email"], "token_use": "access"})
    return _login


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role=UserRole.CLIENT, first_name="Test", last_name="User", **details):
        counter["n"] += 1
        n = counter["n"]
        return UserService(db).create_user(
            cognito_id=f"cognito-{role.value}-{n}",
            email=f"{role.value}{n}@example.com",
            first_name=first_name,
            last_name=last_name,
            role=role,
            **details,
        )
    return _make_user


@pytest.fixture
def client_user(make_user):
    return make_user(UserRole.CLIENT, "Jenny", "Wilson", target="LOSE_WEIGHT", preferred_activity="YOGA")


@pytest.fixture
def coach_user(make_user):
    return make_user(UserRole.COACH, "Kristin", "Watson", title="Yoga Trainer", about="Twelve years of yoga")


@pytest.fixture
def admin_user(make_user):
    return make_user(UserRole.ADMIN, "Ada", "Admin", phone_number=447700900000)


@pytest.fixture
def yoga(db, coach_user):
    """A workout option offered by coach_user."""
    service = WorkoutService(db)
    option = service.create_workout_option("Yoga")
    service.create_mappings(coach_user["_id"], [option["_id"]])
    return option


@pytest.fixture
def time_slot(db):
    return db[TIME_SLOTS].find_one({"startTime": "10:00"})


@pytest.fixture
def tomorrow():
    return (date.today() + timedelta(days=1)).isoformat()


@pytest.fixture
def past_booking(db, client_user, coach_user, yoga, time_slot):
    """A booking from last week that is waiting for feedback."""
    last_week = datetime.combine(date.today() - timedelta(days=7), datetime.min.time())
    booking = Booking(
        client_id=ObjectId(client_user["_id"]),
        coach_id=ObjectId(coach_user["_id"]),
        workout_id=ObjectId(yoga["_id"]),
        time_slot_id=time_slot["_id"],
        date=last_week,
        state=BookingState.WAITING_FOR_FEEDBACK,
    ).to_document()
    booking["_id"] = db[BOOKINGS].insert_one(booking).inserted_id
    return booking
