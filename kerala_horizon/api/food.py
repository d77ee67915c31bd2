"""
Food routes - restaurants, cuisine guide and cooking classes.
"""
from typing import Optional

from fastapi import APIRouter, Query

from ..core.cache import cache, make_key
from ..services import catalog
from ..services.external_tools import get_external_tools
from .deps import ok, require_coordinates

router = APIRouter(prefix="/api/food", tags=["food"])


@router.get("/restaurants/search")
async def search_restaurants(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    radius: int = Query(5000, ge=100, le=50000),
    cuisine: str = "all",
):
    """Nearby restaurants from Google Places, or the local list without a key."""
    lat, lng = require_coordinates(lat, lng)
    key = make_key("restaurants", lat, lng, radius, cuisine)
    cached = cache.get(key)
    if cached is not None:
        return ok(cached, cached=True)

    restaurants, source = await get_external_tools().search_restaurants(lat, lng, radius, cuisine)
    data = {"restaurants": restaurants, "total": len(restaurants), "source": source}
    cache.set(key, data)
    return ok(data)


@router.get("/cuisine/guide")
async def cuisine_guide(cuisine: Optional[str] = None, region: Optional[str] = None):
    guide = dict(catalog.CUISINE_GUIDE)
    if cuisine:
        guide = {k: v for k, v in guide.items() if k == cuisine.lower()}
    if region:
        guide = {
            k: v for k, v in guide.items()
            if any(r.lower() == region.lower() for r in v["regions"])
        }
    return ok({"cuisine_guide": guide})


@router.get("/cooking/classes")
async def cooking_classes(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    cuisine: str = "all",
):
    lat, lng = require_coordinates(lat, lng)
    classes = catalog.cooking_classes_near(lat, lng, cuisine)
    return ok({"cooking_classes": classes, "total": len(classes)})
