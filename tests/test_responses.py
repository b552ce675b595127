import json
import logging

from bson import ObjectId

from backend.errors import HttpError, PayloadValidationError
from backend.logging_config import JsonFormatter, format_for_logging, request_id_var
from backend.responses import format_error_response, success_response


def body(response):
    return json.loads(response.body)


def test_success_envelope():
    oid = ObjectId()
    response = success_response({"id": oid}, "Done", status_code=201)

    assert response.status_code == 201
    assert body(response) == {"status": "success", "message": "Done", "data": {"id": str(oid)}}
    assert response.headers["access-control-allow-origin"] == "*"


def test_http_error_envelope():
    response = format_error_response(HttpError(404, "Coach not found"))
    assert response.status_code == 404
    assert body(response) == {"status": "error", "message": "Coach not found"}


def test_validation_error_envelope():
    errors = [{"field": "name", "message": "Workout name is required"}]
    response = format_error_response(PayloadValidationError(errors))
    assert response.status_code == 400
    assert body(response) == {"status": "error", "message": "Validation failed", "details": errors}


def test_unexpected_error_is_500(caplog):
    with caplog.at_level(logging.ERROR):
        response = format_error_response(KeyError("boom"))

    assert response.status_code == 500
    assert body(response)["message"] == "Internal server error"
    assert "Unhandled error" in caplog.text


def test_format_for_logging_redacts_nested_secrets():
    payload = {
        "email": "a@b.c",
        "password": "hunter22",
        "profile": {"accessToken": "abc", "name": "Jo"},
        "items": [{"Authorization": "Bearer x"}],
    }
    assert format_for_logging(payload) == {
        "email": "a@b.c",
        "password": "[REDACTED]",
        "profile": {"accessToken": "[REDACTED]", "name": "Jo"},
        "items": [{"Authorization": "[REDACTED]"}],
    }
    assert payload["password"] == "hunter22"


def test_json_formatter_includes_extra_fields_and_request_id():
    record = logging.makeLogRecord(
        {"name": "backend.test", "levelname": "INFO", "msg": "Booking workout", "coachId": "c1"}
    )
    token = request_id_var.set("req-1")
    try:
        entry = json.loads(JsonFormatter().format(record))
    finally:
        request_id_var.reset(token)

    assert entry["message"] == "Booking workout"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "backend.test"
    assert entry["coachId"] == "c1"
    assert entry["requestId"] == "req-1"
