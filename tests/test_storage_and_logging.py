import asyncio
import logging

from backend import storage
from backend.auth import get_current_user
from backend.services.coach_service import CoachService


def test_image_keys_become_bucket_urls(monkeypatch):
    monkeypatch.setattr(storage, "USER_IMAGES_BUCKET", "gym-user-images")

    assert storage.image_url("users/1.png") == "https://gym-user-images.s3.amazonaws.com/users/1.png"
    assert storage.image_url("https://cdn.example.com/a.png") == "https://cdn.example.com/a.png"
    assert storage.image_url("") == ""


def test_image_keys_unchanged_without_bucket(monkeypatch):
    monkeypatch.setattr(storage, "USER_IMAGES_BUCKET", "")
    assert storage.image_url("users/1.png") == "users/1.png"


def test_profile_image_served_from_bucket(client, login, client_user, monkeypatch):
    monkeypatch.setattr(storage, "USER_IMAGES_BUCKET", "gym-user-images")
    login(client_user)

    response = client.put("/profile", json={"image": "users/jenny.png"})

    assert response.json()["data"]["image"] == "https://gym-user-images.s3.amazonaws.com/users/jenny.png"


def test_current_user_email_comes_from_the_user_record(db, client_user):
    # Cognito usernames are often UUIDs
    claims = {"sub": client_user["cognitoId"], "username": "3f1c8a52-0d7e-4a1b-9c55-1b2d3e4f5a6b"}

    user = asyncio.run(get_current_user(claims=claims, db=db))

    assert user.email == client_user["email"]


def test_unexpected_error_traceback_is_logged_once(client, monkeypatch, caplog):
    def broken(self):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(CoachService, "get_all_coaches", broken)

    with caplog.at_level(logging.INFO):
        response = client.get("/coaches")

    assert response.status_code == 500
    with_traceback = [r for r in caplog.records if r.exc_info]
    assert len(with_traceback) == 1
    assert any(r.getMessage() == "Getting all coaches failed" for r in caplog.records)
