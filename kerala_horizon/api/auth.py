"""
Auth and user profile routes.
"""
import asyncio

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..models.user import (
    LocationUpdate,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UserPreferences,
    UserProfile,
)
from ..services.auth_service import get_auth_service
from ..services.user_profile import get_user_profile_service
from .deps import get_current_user, get_token_claims, ok, require_coordinates

router = APIRouter(prefix="/api/auth", tags=["auth"])
user_router = APIRouter(prefix="/api/user", tags=["user"])


@router.post("/register", status_code=201)
async def register(request: RegisterRequest):
    """Create an account and sign in."""
    # bcrypt hashing blocks, so it runs in a worker thread
    user, token = await asyncio.to_thread(get_auth_service().register, request)
    return ok({"user": user.public_dict(), "token": token}, message="User registered successfully")


@router.post("/login")
async def login(request: LoginRequest):
    user, token = await asyncio.to_thread(get_auth_service().login, request.email, request.password)
    return ok({"user": user.public_dict(), "token": token}, message="Login successful")


@router.get("/profile")
async def get_profile(user: UserProfile = Depends(get_current_user)):
    return ok({"user": user.public_dict()})


@router.put("/profile")
async def update_profile(request: ProfileUpdateRequest, user: UserProfile = Depends(get_current_user)):
    updated = get_auth_service().update_profile(user.uid, request)
    return ok({"user": updated.public_dict()}, message="Profile updated successfully")


@router.post("/logout")
async def logout(claims: dict = Depends(get_token_claims)):
    get_auth_service().revoke_token(claims)
    return ok(message="Logged out successfully")


@router.post("/reset-password")
async def reset_password(request: ResetPasswordRequest):
    get_auth_service().request_password_reset(request.email)
    return ok(message="If an account exists for this email, a password reset link has been sent")


@user_router.get("/preferences")
async def get_preferences(user: UserProfile = Depends(get_current_user)):
    return ok({"preferences": user.preferences})


@user_router.put("/preferences")
async def update_preferences(preferences: UserPreferences, user: UserProfile = Depends(get_current_user)):
    updated = get_auth_service().update_preferences(user.uid, preferences)
    return ok({"preferences": updated.preferences}, message="Preferences updated successfully")


@user_router.get("/achievements")
async def achievements(user: UserProfile = Depends(get_current_user)):
    return ok({"achievements": get_user_profile_service().achievements(user.uid)})


@user_router.get("/travel-history")
async def travel_history(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user: UserProfile = Depends(get_current_user),
):
    """Past and planned trips, newest first."""
    trips, pagination = get_user_profile_service().travel_history(user.uid, page, limit)
    return ok({"trips": trips, "pagination": pagination})


@user_router.post("/location")
async def update_location(request: LocationUpdate, user: UserProfile = Depends(get_current_user)):
    updated = get_user_profile_service().update_location(user.uid, request)
    return ok({"location": updated.current_location}, message="Location updated successfully")


@user_router.get("/recommendations")
async def recommendations(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    user: UserProfile = Depends(get_current_user),
):
    lat, lng = require_coordinates(lat, lng)
    return ok({"recommendations": get_user_profile_service().recommendations(lat, lng)})
