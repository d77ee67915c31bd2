"""
Culture routes - experiences near the traveller and the festival calendar.
"""
from typing import Optional

from fastapi import APIRouter, Query

from ..core.cache import cache, make_key
from ..services import catalog
from .deps import ok, require_coordinates

router = APIRouter(prefix="/api/culture", tags=["culture"])


@router.get("/experiences")
async def experiences(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    category: str = "all",
):
    lat, lng = require_coordinates(lat, lng)
    key = make_key("culture", lat, lng, category)
    cached = cache.get(key)
    if cached is not None:
        return ok(cached, cached=True)

    found = catalog.experiences_near(lat, lng, category)
    data = {"experiences": found, "total": len(found)}
    cache.set(key, data)
    return ok(data)


@router.get("/events")
async def events(month: Optional[int] = Query(None, ge=1, le=12)):
    calendar = catalog.festival_calendar(month)
    return ok({"events": calendar, "total": len(calendar)})
