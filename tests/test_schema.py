import pytest

from backend.errors import PayloadValidationError
from backend.schema.booking import BookingDay, WorkoutBooking, WorkoutFilter
from backend.schema.feedback import AddFeedback, FeedbackQuery, FeedbackSort
from backend.schema.forms import ReportForm, SearchForm
from backend.schema.preferences import ClientPreference
from backend.schema.validation import validate_payload
from backend.schema.workout_option import CreateWorkoutOption, WorkoutMapping


def messages(schema, payload):
    with pytest.raises(PayloadValidationError) as exc_info:
        validate_payload(schema, payload)
    assert exc_info.value.status == 400
    return exc_info.value.messages


def test_every_missing_booking_field_is_reported():
    assert messages(WorkoutBooking, {}) == [
        "Workout ID is required",
        "Coach ID is required",
        "Time Slot ID is required",
        "Invalid date format",
    ]


def test_booking_reports_only_the_bad_fields():
    payload = {"workoutId": "w1", "coachId": "", "timeSlotId": "t1", "date": "not a date"}
    assert messages(WorkoutBooking, payload) == ["Coach ID is required", "Invalid date format"]


def test_valid_booking_normalizes_date_to_midnight():
    booking = validate_payload(
        WorkoutBooking,
        {"workoutId": "w1", "coachId": "c1", "timeSlotId": "t1", "date": "2030-03-04T15:30:00Z"},
    )
    assert booking.coach_id == "c1"
    assert (booking.date.year, booking.date.month, booking.date.day, booking.date.hour) == (2030, 3, 4, 0)


def test_workout_option_name():
    assert messages(CreateWorkoutOption, {}) == ["Workout name is required"]
    assert messages(CreateWorkoutOption, {"name": "Y"}) == ["Workout name is required"]
    assert validate_payload(CreateWorkoutOption, {"name": "Yoga"}).name == "Yoga"


def test_workout_mapping():
    assert messages(WorkoutMapping, {"workoutIds": "abc"}) == [
        "Coach ID is required",
        "Workout IDs must be a list of IDs",
    ]


def test_feedback_reports_all_constraints():
    assert messages(AddFeedback, {"rating": 6}) == [
        "Booking ID is required",
        "Message is required",
        "Rating must be between 1 and 5",
    ]
    assert messages(AddFeedback, {"bookingId": "b", "message": "ok", "rating": True}) == [
        "Rating must be between 1 and 5"
    ]


def test_feedback_query_defaults_and_aliases():
    query = validate_payload(FeedbackQuery, {})
    assert (query.page, query.per_page, query.sort_by) == (1, 10, FeedbackSort.NEWEST)

    query = validate_payload(FeedbackQuery, {"page": "2", "perPage": "5", "sortBy": "rating_asc"})
    assert (query.page, query.per_page, query.sort_by) == (2, 5, FeedbackSort.LOWEST_RATED)

    with pytest.raises(PayloadValidationError):
        validate_payload(FeedbackQuery, {"page": "0"})


def test_filters_are_optional():
    filters = validate_payload(WorkoutFilter, {"coachId": "c1"})
    assert filters.coach_id == "c1"
    assert filters.workout_id is None
    assert filters.date is None


def test_booking_day_requires_a_date():
    assert messages(BookingDay, {"date": None}) == ["Date parameter is required"]


def test_report_form():
    assert messages(ReportForm, {}) == ["Report type is required", "Period is required", "Gym is required"]


def test_search_form():
    assert messages(SearchForm, {"typeOfSport": "Yoga", "date": "2030-01-01"}) == [
        "Time is required",
        "Coach is required",
    ]


def test_client_preference_enums():
    assert messages(ClientPreference, {"target": "FLY"}) == ["Please select a valid target"]
    update = validate_payload(ClientPreference, {"firstName": "Jo", "preferredActivity": "PILATES"})
    assert update.first_name == "Jo"
    assert update.preferred_activity == "PILATES"


def test_non_object_body_is_rejected():
    assert messages(CreateWorkoutOption, ["Yoga"]) == ["Request body must be a JSON object"]
