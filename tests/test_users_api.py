from backend.database import CLIENT_DETAILS, COACH_EMAILS, USERS
from backend.models import CoachEmail


def sign_up(claims, sub="cognito-new", email="new@example.com"):
    claims.clear()
    claims.update({"sub": sub, "email": email, "token_use": "access"})


def test_new_account_has_no_profile_until_registered(client, claims):
    sign_up(claims)
    assert client.get("/profile").status_code == 404

    response = client.post(
        "/users",
        json={"firstName": "Cameron", "lastName": "Williamson", "target": "GENERAL_FITNESS", "preferredActivity": "CARDIO_TRAINING"},
    )

    assert response.status_code == 201
    user = response.json()["data"]
    assert user["cognitoId"] == "cognito-new"
    assert user["role"] == "client"

    profile = client.get("/profile").json()["data"]
    assert profile["email"] == "new@example.com"
    assert profile["target"] == "GENERAL_FITNESS"
    assert profile["preferredActivity"] == "CARDIO_TRAINING"


def test_coach_email_registers_a_coach(client, db, claims):
    db[COACH_EMAILS].insert_one(CoachEmail(email="coach@gym.com").to_document())
    sign_up(claims, email="coach@gym.com")

    response = client.post("/users", json={"firstName": "Wade", "lastName": "Warren"})

    assert response.status_code == 201
    assert response.json()["data"]["role"] == "coach"
    assert client.get("/coach/profile").status_code == 200


def test_email_from_payload_when_token_has_none(client, db, claims):
    claims.update({"sub": "cognito-no-email", "token_use": "access"})

    response = client.post("/users", json={"firstName": "Guy", "lastName": "Hawkins", "email": "guy@example.com"})

    assert response.status_code == 201
    assert db[USERS].find_one({"cognitoId": "cognito-no-email"})["email"] == "guy@example.com"


def test_registering_twice_conflicts(client, db, claims):
    sign_up(claims)
    payload = {"firstName": "Cameron", "lastName": "Williamson"}
    assert client.post("/users", json=payload).status_code == 201

    response = client.post("/users", json=payload)

    assert response.status_code == 409
    assert db[USERS].count_documents({"cognitoId": "cognito-new"}) == 1
    assert db[CLIENT_DETAILS].count_documents({}) == 1


def test_registration_validation(client, claims):
    sign_up(claims)
    response = client.post("/users", json={"target": "FLY"})

    assert response.status_code == 400
    assert [d["message"] for d in response.json()["details"]] == [
        "First name is required",
        "Last name is required",
        "Please select a valid target",
    ]


def test_registration_needs_a_token(client):
    assert client.post("/users", json={"firstName": "A", "lastName": "B"}).status_code == 401
