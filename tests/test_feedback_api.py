from datetime import date, datetime, timedelta

from bson import ObjectId

from backend.database import BOOKINGS, COACH_DETAILS, USERS
from backend.models import BookingState


def leave_feedback(client, booking, message="Great session", rating=5):
    return client.post(
        "/feedback",
        json={"bookingId": str(booking["_id"]), "message": message, "rating": rating},
    )


def test_feedback_round_trip(client, login, client_user, coach_user, past_booking):
    login(client_user)
    response = client.post(
        "/feedback",
        json={
            "userId": client_user["_id"],
            "bookingId": str(past_booking["_id"]),
            "message": "Loved the flow",
            "rating": 4,
        },
    )
    assert response.status_code == 201

    response = client.get(f"/feedback/coach/{coach_user['_id']}")

    assert response.status_code == 200
    page = response.json()["data"]
    assert page["total"] == 1
    [entry] = page["feedback"]
    assert entry["bookingId"] == str(past_booking["_id"])
    assert entry["userId"] == client_user["_id"]
    assert entry["message"] == "Loved the flow"
    assert entry["rating"] == 4
    assert entry["from"]["name"] == "Jenny Wilson"


def test_client_feedback_completes_booking_and_rates_coach(client, db, login, client_user, coach_user, past_booking):
    login(client_user)
    leave_feedback(client, past_booking, rating=4)

    assert db[BOOKINGS].find_one({"_id": past_booking["_id"]})["state"] == BookingState.COMPLETED.value
    coach = db[USERS].find_one({"_id": ObjectId(coach_user["_id"])})
    assert db[COACH_DETAILS].find_one({"_id": coach["coachId"]})["rating"] == 4


def test_feedback_only_once(client, login, client_user, past_booking):
    login(client_user)
    assert leave_feedback(client, past_booking).status_code == 201
    assert leave_feedback(client, past_booking).status_code == 409


def test_coach_feedback_is_not_counted_for_coach(client, login, client_user, coach_user, past_booking):
    login(coach_user)
    assert leave_feedback(client, past_booking, message="Good effort").status_code == 201

    page = client.get(f"/feedback/coach/{coach_user['_id']}").json()["data"]
    assert page["total"] == 0


def test_feedback_for_someone_elses_booking(client, login, make_user, past_booking):
    login(make_user())
    assert leave_feedback(client, past_booking).status_code == 403


def test_feedback_before_workout_is_rejected(client, db, login, client_user, past_booking):
    db[BOOKINGS].update_one({"_id": past_booking["_id"]}, {"$set": {"state": BookingState.CANCELED.value}})
    login(client_user)
    assert leave_feedback(client, past_booking).status_code == 400


def test_feedback_validation(client, login, client_user):
    login(client_user)
    response = client.post("/feedback", json={"rating": 9})

    assert response.status_code == 400
    assert [d["message"] for d in response.json()["details"]] == [
        "Booking ID is required",
        "Message is required",
        "Rating must be between 1 and 5",
    ]


def test_feedback_pagination_and_sorting(client, db, login, make_user, coach_user, past_booking):
    ratings = [5, 2, 4]
    for rating in ratings:
        author = make_user(target="LOSE_WEIGHT", preferred_activity="YOGA")
        booking = dict(past_booking)
        booking.pop("_id")
        booking["clientId"] = ObjectId(author["_id"])
        booking["_id"] = db[BOOKINGS].insert_one(booking).inserted_id
        login(author)
        assert leave_feedback(client, booking, rating=rating).status_code == 201

    url = f"/feedback/coach/{coach_user['_id']}"
    page = client.get(url, params={"perPage": 2, "sortBy": "rating"}).json()["data"]
    assert [f["rating"] for f in page["feedback"]] == [5, 4]
    assert page["totalPages"] == 2
    assert page["currentPage"] == 1
    assert page["averageRating"] == 3.7

    page = client.get(url, params={"perPage": 2, "page": 2, "sortBy": "rating"}).json()["data"]
    assert [f["rating"] for f in page["feedback"]] == [2]

    page = client.get(url, params={"sortBy": "rating_asc"}).json()["data"]
    assert [f["rating"] for f in page["feedback"]] == [2, 4, 5]


def test_feedback_for_unknown_coach(client):
    assert client.get(f"/feedback/coach/{ObjectId()}").status_code == 404


def test_feedback_on_yesterdays_scheduled_booking(client, db, login, client_user, coach_user, past_booking):
    yesterday = datetime.combine(date.today() - timedelta(days=1), datetime.min.time())
    db[BOOKINGS].update_one(
        {"_id": past_booking["_id"]},
        {"$set": {"state": BookingState.SCHEDULED.value, "date": yesterday}},
    )
    login(client_user)

    response = leave_feedback(client, past_booking, rating=5)

    assert response.status_code == 201
    assert db[BOOKINGS].find_one({"_id": past_booking["_id"]})["state"] == BookingState.COMPLETED.value
    assert client.get(f"/feedback/coach/{coach_user['_id']}").json()["data"]["total"] == 1


def test_feedback_on_upcoming_booking_is_rejected(client, login, client_user, coach_user, yoga, time_slot, tomorrow):
    login(client_user)
    booking = client.post(
        "/workouts",
        json={
            "workoutId": yoga["_id"],
            "coachId": coach_user["_id"],
            "timeSlotId": str(time_slot["_id"]),
            "date": tomorrow,
        },
    ).json()["data"]

    response = leave_feedback(client, {"_id": booking["bookingId"]})

    assert response.status_code == 400
    assert response.json()["message"] == "Feedback can only be left for a finished workout"
