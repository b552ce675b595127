"""Cognito JWT authentication for FastAPI."""
import logging
import time
from functools import lru_cache
from typing import Callable, Dict, List, Optional

import requests
from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pymongo.database import Database

from backend.config import COGNITO_CLIENT_ID, COGNITO_ISSUER
from backend.database import USERS, get_db
from backend.errors import HttpError
from backend.models import AuthenticatedUser, UserRole

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@lru_cache(maxsize=1)
def get_cognito_public_keys() -> List[Dict]:
    """
    Fetch and cache the user pool's public keys for JWT verification.

    lru_cache works per Lambda instance. Cold starts re-fetch, warm
    instances reuse the cached keys.
    """
    if not COGNITO_ISSUER:
        logger.warning("COGNITO_USER_POOL_ID not configured")
        return []

    jwks_url = f"{COGNITO_ISSUER}/.well-known/jwks.json"

    max_retries = 3
    for attempt in range(max_retries):
        try:
            response = requests.get(jwks_url, timeout=5)
            response.raise_for_status()
            return response.json()["keys"]
        except requests.exceptions.Timeout:
            logger.warning(f"Timeout fetching Cognito JWKS, attempt {attempt + 1}/{max_retries}")
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching Cognito JWKS: {e}")
            break

    # Don't cache the failure
    get_cognito_public_keys.cache_clear()
    return []


def verify_token(token: str) -> dict:
    """
    Verify a Cognito access token and return its claims.

    Raises:
        HttpError: 401 if the token is invalid, 500 if Cognito is not configured
    """
    if not COGNITO_ISSUER or not COGNITO_CLIENT_ID:
        raise HttpError(500, "Cognito not configured")

    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise HttpError(401, "Invalid or expired token", str(e))

    jwks = get_cognito_public_keys()
    if not jwks:
        raise HttpError(500, "Unable to fetch Cognito public keys")

    rsa_key = next((key for key in jwks if key["kid"] == unverified_header.get("kid")), None)
    if not rsa_key:
        raise HttpError(401, "Unable to find appropriate key")

    try:
        # Access tokens carry client_id instead of aud, so audience is checked by hand
        claims = jwt.decode(
            token,
            rsa_key,
            algorithms=["RS256"],
            issuer=COGNITO_ISSUER,
            options={"verify_aud": False},
        )
    except JWTError as e:
        raise HttpError(401, "Invalid or expired token", str(e))

    if claims.get("token_use") != "access":
        raise HttpError(401, "Invalid or expired token", "Not an access token")
    if claims.get("client_id") != COGNITO_CLIENT_ID:
        raise HttpError(401, "Invalid or expired token", "Token issued for another client")
    if claims.get("exp", 0) < time.time():
        raise HttpError(401, "Invalid or expired token", "Token expired")

    return claims


async def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> dict:
    """Dependency returning the verified claims of the bearer token."""
    if credentials is None:
        logger.warning("Missing Authorization header")
        raise HttpError(401, "Missing Authorization header")
    return verify_token(credentials.credentials)


async def get_current_user(
    claims: dict = Depends(get_token_claims),
    db: Database = Depends(get_db),
) -> AuthenticatedUser:
    """
    Dependency to get the current authenticated user.

    The token's 'sub' claim is the Cognito id; the user document
    stored under it supplies the role and the database id.
    """
    cognito_id = claims.get("sub")
    if not cognito_id:
        raise HttpError(401, "Invalid token payload - missing 'sub' claim")

    user = db[USERS].find_one({"cognitoId": cognito_id})
    if not user:
        logger.warning("User not found in database", extra={"cognitoId": cognito_id})
        raise HttpError(404, "User not found")

    return AuthenticatedUser(
        cognito_id=cognito_id,
        email=user.get("email", ""),
        role=user["role"],
        user_id=str(user["_id"]),
    )


def require_roles(*roles: UserRole) -> Callable:
    """
    Build a dependency that only lets the given roles through.

    Usage: user: AuthenticatedUser = Depends(require_roles(UserRole.CLIENT))
    """
    async def check_role(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
        if user.role not in roles:
            logger.warning(
                "Unauthorized access attempt",
                extra={"userRole": user.role, "allowedRoles": [r.value for r in roles]},
            )
            raise HttpError(403, "You do not have permission to access this resource")
        return user

    return check_role
