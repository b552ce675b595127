import pytest
from bson import ObjectId

from backend.database import ADMIN_EMAILS, CLIENT_DETAILS, COACH_DETAILS, COACH_EMAILS, USERS
from backend.errors import HttpError
from backend.models import AdminEmail, CoachEmail, UserRole
from backend.services.user_service import UserService


def test_role_comes_from_email_lists(db):
    db[COACH_EMAILS].insert_one(CoachEmail(email="coach@gym.com").to_document())
    db[ADMIN_EMAILS].insert_one(AdminEmail(email="admin@gym.com").to_document())
    service = UserService(db)

    assert service.determine_user_role("coach@gym.com") == UserRole.COACH
    assert service.determine_user_role("admin@gym.com") == UserRole.ADMIN
    assert service.determine_user_role("someone@gym.com") == UserRole.CLIENT


def test_role_needs_an_email(db):
    with pytest.raises(HttpError) as exc_info:
        UserService(db).determine_user_role("")
    assert exc_info.value.status == 400


def test_create_user_links_role_details(db):
    db[COACH_EMAILS].insert_one(CoachEmail(email="coach@gym.com").to_document())

    user = UserService(db).create_user("cog-1", "coach@gym.com", "Wade", "Warren")

    assert user["role"] == "coach"
    stored = db[USERS].find_one({"_id": ObjectId(user["_id"])})
    assert db[COACH_DETAILS].find_one({"_id": stored["coachId"]}) is not None
    assert "clientId" not in stored
    assert "adminId" not in stored


def test_create_client_stores_preferences(db):
    user = UserService(db).create_user(
        "cog-2", "client@gym.com", "Jenny", "Wilson", target="GENERAL_FITNESS", preferred_activity="CARDIO_TRAINING"
    )
    details = db[CLIENT_DETAILS].find_one({"_id": ObjectId(user["clientId"])})
    assert details["target"] == "GENERAL_FITNESS"
    assert details["preferredActivity"] == "CARDIO_TRAINING"


def test_duplicate_user(db):
    service = UserService(db)
    service.create_user("cog-3", "dup@gym.com", "A", "B")

    with pytest.raises(HttpError) as exc_info:
        service.create_user("cog-4", "dup@gym.com", "A", "B")
    assert exc_info.value.status == 409


def test_lookups(db):
    service = UserService(db)
    user = service.create_user("cog-5", "find@gym.com", "Guy", "Hawkins")

    assert service.get_user_by_cognito_id("cog-5")["_id"] == user["_id"]
    assert service.get_user_by_email("find@gym.com")["cognitoId"] == "cog-5"
    assert service.get_user_by_email("nobody@gym.com") is None
