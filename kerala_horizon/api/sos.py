"""
SOS routes - emergency helplines and nearby services.
"""
from typing import Optional

from fastapi import APIRouter

from ..services import catalog
from .deps import ok, require_coordinates

router = APIRouter(prefix="/api/sos", tags=["sos"])


@router.get("/emergency-contacts")
async def emergency_contacts(lat: Optional[float] = None, lng: Optional[float] = None):
    lat, lng = require_coordinates(lat, lng)
    return ok({
        "emergency_contacts": catalog.EMERGENCY_CONTACTS,
        "nearby_services": catalog.nearby_emergency_services(lat, lng),
        "location": {"lat": lat, "lng": lng},
    })
