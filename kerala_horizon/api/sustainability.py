"""
Green score routes.
"""
from fastapi import APIRouter, Depends, Query

from ..models.green_score import ActivityCreate, PointsRequest
from ..models.user import UserProfile
from ..services.green_score import calculate_points, get_green_score_service
from .deps import get_current_user, ok

router = APIRouter(prefix="/api/sustainability", tags=["sustainability"])


@router.get("/green-score")
async def get_green_score(user: UserProfile = Depends(get_current_user)):
    service = get_green_score_service()
    profile = service.get_profile(user.uid)
    return ok({
        "green_score": profile,
        "rewards": service.rewards(profile.total_score),
    })


@router.post("/activities", status_code=201)
async def add_activity(activity: ActivityCreate, user: UserProfile = Depends(get_current_user)):
    """Record an eco-friendly activity; points are calculated when details are sent."""
    profile = get_green_score_service().add_activity(user.uid, activity)
    return ok({"green_score": profile}, message="Activity recorded successfully")


@router.post("/calculate")
async def calculate(request: PointsRequest):
    points, carbon_saved = calculate_points(request.type, request.details)
    return ok({"points": points, "carbon_saved": carbon_saved})


@router.get("/badges")
async def list_badges():
    return ok({"badges": get_green_score_service().badges()})


@router.get("/leaderboard")
async def leaderboard(limit: int = Query(10, ge=1, le=100)):
    return ok({"leaderboard": get_green_score_service().leaderboard(limit)})
