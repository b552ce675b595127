"""Profile API: the caller's own profile, per-role profiles and lookups."""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from pymongo.database import Database

from backend.auth import get_current_user, require_roles
from backend.controllers.profile import PREFERENCE_SCHEMAS, ProfileController
from backend.database import get_db
from backend.models import AuthenticatedUser, UserRole
from backend.responses import format_error_response, success_response
from backend.schema.validation import validate_payload

router = APIRouter(tags=["profile"])


def read_profile(user: AuthenticatedUser, db: Database):
    try:
        profile = ProfileController(db).get_profile(user.cognito_id)
        return success_response(profile, "Profile fetched successfully")
    except Exception as e:
        return format_error_response(e)


def update_profile(user: AuthenticatedUser, payload: Any, db: Database):
    """Validate the update against the caller's role schema and apply it."""
    try:
        update = validate_payload(PREFERENCE_SCHEMAS[user.role], payload)
        profile = ProfileController(db).update_profile(user.cognito_id, user.role, update)
        return success_response(profile, "Profile updated successfully")
    except Exception as e:
        return format_error_response(e)


@router.get("/profile")
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    return read_profile(user, db)


@router.put("/profile")
async def put_profile(
    payload: Dict[str, Any] = Body(default=None),
    user: AuthenticatedUser = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    return update_profile(user, payload, db)


@router.get("/client/profile")
async def get_client_profile(
    user: AuthenticatedUser = Depends(require_roles(UserRole.CLIENT)),
    db: Database = Depends(get_db),
):
    return read_profile(user, db)


@router.put("/client/profile")
async def put_client_profile(
    payload: Dict[str, Any] = Body(default=None),
    user: AuthenticatedUser = Depends(require_roles(UserRole.CLIENT)),
    db: Database = Depends(get_db),
):
    return update_profile(user, payload, db)


@router.get("/coach/profile")
async def get_coach_profile(
    user: AuthenticatedUser = Depends(require_roles(UserRole.COACH)),
    db: Database = Depends(get_db),
):
    return read_profile(user, db)


@router.put("/coach/profile")
async def put_coach_profile(
    payload: Dict[str, Any] = Body(default=None),
    user: AuthenticatedUser = Depends(require_roles(UserRole.COACH)),
    db: Database = Depends(get_db),
):
    return update_profile(user, payload, db)


@router.get("/admin/profile")
async def get_admin_profile(
    user: AuthenticatedUser = Depends(require_roles(UserRole.ADMIN)),
    db: Database = Depends(get_db),
):
    return read_profile(user, db)


@router.put("/admin/profile")
async def put_admin_profile(
    payload: Dict[str, Any] = Body(default=None),
    user: AuthenticatedUser = Depends(require_roles(UserRole.ADMIN)),
    db: Database = Depends(get_db),
):
    return update_profile(user, payload, db)


@router.get("/coach/clients/{client_id}")
async def get_client_for_coach(
    client_id: str,
    user: AuthenticatedUser = Depends(require_roles(UserRole.COACH)),
    db: Database = Depends(get_db),
):
    """A client's profile, as seen by a coach."""
    try:
        profile = ProfileController(db).get_client_profile(client_id)
        return success_response(profile, "Client profile fetched successfully")
    except Exception as e:
        return format_error_response(e)


@router.get("/admin/users/{user_id}")
async def get_user_for_admin(
    user_id: str,
    user: AuthenticatedUser = Depends(require_roles(UserRole.ADMIN)),
    db: Database = Depends(get_db),
):
    try:
        profile = ProfileController(db).get_profile_by_id(user_id)
        return success_response(profile, "User profile fetched successfully")
    except Exception as e:
        return format_error_response(e)
