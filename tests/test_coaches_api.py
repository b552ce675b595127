from bson import ObjectId

from backend.database import TIME_SLOTS


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_coaches(client, coach_user, yoga):
    response = client.get("/coaches")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    [coach] = body["data"]
    assert coach["id"] == coach_user["_id"]
    assert coach["title"] == "Yoga Trainer"
    assert coach["specializations"] == [{"value": yoga["_id"], "label": "Yoga"}]


def test_responses_carry_cors_headers(client):
    response = client.get("/coaches")
    assert response.headers["access-control-allow-origin"] == "*"


def test_get_coach(client, coach_user):
    response = client.get(f"/coaches/{coach_user['_id']}")
    assert response.status_code == 200
    assert response.json()["data"]["about"] == "Twelve years of yoga"


def test_unknown_coach(client, client_user):
    assert client.get(f"/coaches/{ObjectId()}").status_code == 404
    # A client is not a coach
    assert client.get(f"/coaches/{client_user['_id']}").status_code == 404
    assert client.get("/coaches/nope").status_code == 400


def test_time_slots_flag_booked_slots(client, db, login, client_user, coach_user, yoga, time_slot, tomorrow):
    login(client_user)
    client.post(
        "/workouts",
        json={
            "workoutId": yoga["_id"],
            "coachId": coach_user["_id"],
            "timeSlotId": str(time_slot["_id"]),
            "date": tomorrow,
        },
    )

    response = client.get(f"/coaches/{coach_user['_id']}/time-slots", params={"date": tomorrow})

    assert response.status_code == 200
    slots = response.json()["data"]
    assert len(slots) == db[TIME_SLOTS].count_documents({})
    booked = [slot["startTime"] for slot in slots if slot["isBooked"]]
    assert booked == ["10:00"]


def test_time_slots_need_a_date(client, coach_user):
    response = client.get(f"/coaches/{coach_user['_id']}/time-slots")
    assert response.status_code == 400
    assert response.json()["details"][0]["message"] == "Date parameter is required"


def test_bookings_for_day(client, login, client_user, coach_user, past_booking):
    day = past_booking["date"].date().isoformat()

    login(client_user)
    [booking] = client.get("/bookings/day", params={"date": day}).json()["data"]
    assert booking["bookingId"] == str(past_booking["_id"])

    login(coach_user)
    response = client.get("/bookings/day", params={"date": day})
    assert response.status_code == 200
    assert len(response.json()["data"]) == 1


def test_bookings_for_day_other_day(client, login, client_user, past_booking, tomorrow):
    login(client_user)
    response = client.get("/bookings/day", params={"date": tomorrow})
    assert response.json()["data"] == []


def test_admins_have_no_bookings(client, login, admin_user, tomorrow):
    login(admin_user)
    assert client.get("/bookings/day", params={"date": tomorrow}).status_code == 403
