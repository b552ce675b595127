"""Reading the signed-in user out of a Cognito ID token."""
import logging
from typing import Any, Dict, Optional

from jose import jwt

from backend.models import UserRole

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("sub", "email", "family_name", "given_name")


def decode_id_token(id_token: str) -> Dict[str, Any]:
    """Claims of an ID token, without verifying the signature.

    Only for display purposes; the API verifies every token it receives.
    """
    return jwt.get_unverified_claims(id_token)


def extract_user_from_decoded_token(decoded: Optional[Dict[str, Any]]) -> Optional[Dict[str, str]]:
    if not decoded:
        return None

    if any(not decoded.get(claim) for claim in REQUIRED_CLAIMS):
        logger.error("Required fields are missing in token")
        return None

    role = decoded.get("custom:role") or UserRole.CLIENT.value
    return {
        "id": decoded["sub"],
        "role": role.upper(),
        "email": decoded["email"],
        "lastName": decoded["family_name"],
        "firstName": decoded["given_name"],
    }
