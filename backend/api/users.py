"""User registration API."""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from pymongo.database import Database

from backend.auth import get_token_claims
from backend.controllers.user import UserController
from backend.database import get_db
from backend.errors import HttpError
from backend.responses import format_error_response, success_response
from backend.schema.user import RegisterUser
from backend.schema.validation import validate_payload

router = APIRouter(prefix="/users", tags=["users"])


@router.post("")
async def register_user(
    payload: Dict[str, Any] = Body(default=None),
    claims: dict = Depends(get_token_claims),
    db: Database = Depends(get_db),
):
    """
    Create the user record for a freshly signed-up Cognito account.

    The role comes from the coach and admin email lists; everyone else is a client.
    """
    try:
        registration = validate_payload(RegisterUser, payload)
        cognito_id = claims.get("sub")
        if not cognito_id:
            raise HttpError(401, "Invalid token payload - missing 'sub' claim")

        user = UserController(db).register(
            cognito_id, claims.get("email") or registration.email, registration
        )
        return success_response(user, "User registered successfully", status_code=201)
    except Exception as e:
        return format_error_response(e)
