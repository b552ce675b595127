"""Workout feedback API."""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request
from pymongo.database import Database

from backend.auth import require_roles
from backend.controllers.feedback import FeedbackController
from backend.database import get_db, to_object_id
from backend.models import AuthenticatedUser, UserRole
from backend.responses import format_error_response, success_response
from backend.schema.feedback import AddFeedback, FeedbackQuery
from backend.schema.validation import validate_payload

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("")
async def add_feedback(
    payload: Dict[str, Any] = Body(default=None),
    user: AuthenticatedUser = Depends(require_roles(UserRole.CLIENT, UserRole.COACH)),
    db: Database = Depends(get_db),
):
    """Leave feedback on one of the caller's finished workouts."""
    try:
        feedback = validate_payload(AddFeedback, payload)
        result = FeedbackController(db).add_feedback(
            to_object_id(user.user_id, "user ID"),
            to_object_id(feedback.booking_id, "booking ID"),
            feedback.message,
            feedback.rating,
        )
        return success_response(result, "Feedback added successfully", status_code=201)
    except Exception as e:
        return format_error_response(e)


@router.get("/coach/{coach_id}")
async def get_coach_feedback(coach_id: str, request: Request, db: Database = Depends(get_db)):
    """
    Feedback a coach received, paginated.

    Query: page, perPage, sortBy (timestamp, timestamp_asc, rating, rating_asc).
    """
    try:
        query = validate_payload(FeedbackQuery, dict(request.query_params))
        result = FeedbackController(db).get_feedback_for_coach(
            to_object_id(coach_id, "coach ID"),
            per_page=query.per_page,
            page=query.page,
            sort_by=query.sort_by,
        )
        return success_response(result, "Feedback fetched successfully")
    except Exception as e:
        return format_error_response(e)
