"""
AI tool routes - concierge, surprise plans, translation, packing, budgets,
safety alerts and weather.
"""
import json
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from ..core.cache import cache, make_key
from ..core.errors import ValidationError
from ..models.user import UserProfile
from ..services import ai_tools
from ..services.external_tools import get_external_tools
from .deps import get_current_user, ok, require_coordinates

router = APIRouter(prefix="/api/ai", tags=["ai"])


# Request Models

class ConciergeRequest(BaseModel):
    location: Optional[str] = None
    interests: list[str] = Field(default_factory=list)
    budget: Optional[str] = None
    duration: Optional[str] = None
    group_size: int = Field(default=1, ge=1, le=50)
    preferences: dict = Field(default_factory=dict)


class SurpriseRequest(BaseModel):
    mood: str = "adventure"
    location: Optional[str] = None


class TranslateRequest(BaseModel):
    text: Optional[str] = None
    from_lang: str = "auto"
    to_lang: str = "en"


class PackingRequest(BaseModel):
    destination: Optional[str] = None
    duration: Optional[int] = Field(None, ge=1)
    season: Optional[str] = None
    activities: list[str] = Field(default_factory=list)


class ExpenseRequest(BaseModel):
    budget: Optional[float] = Field(None, ge=0)
    duration: Optional[int] = Field(None, ge=1, le=365)
    destination: Optional[str] = None
    travelers: int = Field(default=1, ge=1, le=50)


# Endpoints

@router.post("/concierge")
async def concierge(request: ConciergeRequest, user: UserProfile = Depends(get_current_user)):
    """Personalised recommendations for a location."""
    if not request.location:
        raise ValidationError("Location is required")

    key = make_key(
        "concierge",
        request.location.lower(),
        ",".join(sorted(request.interests)),
        request.budget,
        request.duration,
        request.group_size,
        json.dumps(request.preferences, sort_keys=True),
    )
    cached = cache.get(key)
    if cached is not None:
        return ok(cached, cached=True)

    recommendations, source = await ai_tools.concierge_recommendations(
        request.location,
        request.interests,
        request.budget,
        request.duration,
        request.group_size,
        request.preferences,
    )
    data = {"recommendations": recommendations, "location": request.location, "source": source}
    cache.set(key, data)
    return ok(data)


@router.post("/surprise-me")
async def surprise_me(request: SurpriseRequest, user: UserProfile = Depends(get_current_user)):
    mood = request.mood if request.mood in ai_tools.SURPRISE_ITINERARIES else "adventure"
    return ok({
        "mood": mood,
        "location": request.location or "Kerala",
        "itinerary": ai_tools.surprise_itinerary(mood),
    })


@router.post("/translate")
async def translate(request: TranslateRequest):
    if not request.text:
        raise ValidationError("Text is required")
    return ok(ai_tools.translate(request.text, request.from_lang, request.to_lang))


@router.post("/packing-assistant")
async def packing_assistant(request: PackingRequest, user: UserProfile = Depends(get_current_user)):
    if not request.destination or not request.duration:
        raise ValidationError("Destination and duration are required")
    return ok({
        "destination": request.destination,
        "duration": request.duration,
        "packing_list": ai_tools.packing_list(request.season, request.activities),
        "tips": ai_tools.PACKING_TIPS,
    })


@router.get("/weather")
async def weather(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    days: int = Query(3, ge=1, le=16),
):
    lat, lng = require_coordinates(lat, lng)
    return ok(await get_external_tools().get_weather_forecast(lat, lng, days))


@router.post("/expense-optimizer")
async def expense_optimizer(request: ExpenseRequest, user: UserProfile = Depends(get_current_user)):
    """Split a budget across spending categories with saving tips."""
    if request.budget is None or not request.duration or not request.destination:
        raise ValidationError("Budget, duration and destination are required")
    return ok(ai_tools.optimize_expenses(request.budget, request.duration, request.destination, request.travelers))


@router.get("/safety-alerts")
async def safety_alerts(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    user: UserProfile = Depends(get_current_user),
):
    lat, lng = require_coordinates(lat, lng)
    alerts = ai_tools.safety_alerts(lat, lng)
    return ok({"alerts": alerts, "total": len(alerts)})


@router.get("/weather-recommendations")
async def weather_recommendations(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    user: UserProfile = Depends(get_current_user),
):
    """Activity suggestions for today's forecast at a location."""
    lat, lng = require_coordinates(lat, lng)
    forecast = await get_external_tools().get_weather_forecast(lat, lng, 1)
    today = forecast["forecast"][0] if forecast["forecast"] else None
    data = ai_tools.weather_recommendations(today["condition"] if today else "Clear")
    data["forecast"] = today
    data["source"] = forecast["source"]
    return ok(data)
