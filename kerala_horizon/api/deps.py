"""
Shared request dependencies and response helpers.
"""
from typing import Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.errors import AuthenticationError, ValidationError
from ..models.user import UserProfile
from ..services.auth_service import get_auth_service

bearer_scheme = HTTPBearer(auto_error=False)


def ok(data: Any = None, message: Optional[str] = None, **extra) -> dict:
    """Standard success envelope."""
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body


def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No authentication token provided")
    return get_auth_service().decode_token(credentials.credentials)


def get_current_user(claims: dict = Depends(get_token_claims)) -> UserProfile:
    user = get_auth_service().users.get(claims.get("uid", ""))
    if user is None:
        raise AuthenticationError("Invalid authentication token")
    return user


def require_coordinates(lat: Optional[float], lng: Optional[float]) -> tuple[float, float]:
    if lat is None or lng is None:
        raise ValidationError("Latitude and longitude are required")
    return lat, lng
