"""
Shopping routes.
"""
from typing import Optional

from fastapi import APIRouter

from ..services import catalog
from .deps import ok, require_coordinates

router = APIRouter(prefix="/api/shopping", tags=["shopping"])


@router.get("/stores")
async def search_stores(lat: Optional[float] = None, lng: Optional[float] = None, category: str = "all"):
    lat, lng = require_coordinates(lat, lng)
    stores = catalog.stores_near(lat, lng, category)
    return ok({"stores": stores, "total": len(stores)})
