"""
Stay routes - accommodation search and bookings.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.cache import cache, make_key
from ..models.places import BookingRequest
from ..models.user import UserProfile
from ..services import catalog
from ..services.bookings import get_booking_service
from .deps import get_current_user, ok, require_coordinates

router = APIRouter(prefix="/api/stay", tags=["stay"])


@router.get("/search")
async def search_stays(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    category: str = "all",
    price_min: Optional[float] = Query(None, ge=0),
    price_max: Optional[float] = Query(None, ge=0),
    rating: Optional[float] = Query(None, ge=0, le=5),
    amenities: Optional[str] = Query(None, description="Comma separated, all must be offered"),
):
    lat, lng = require_coordinates(lat, lng)
    key = make_key("stay_search", lat, lng, category, price_min, price_max, rating, amenities)
    cached = cache.get(key)
    if cached is not None:
        return ok(cached, cached=True)

    wanted = [a.strip().lower() for a in (amenities or "").split(",") if a.strip()]
    stays = []
    for stay in catalog.accommodations_near(lat, lng):
        if category != "all" and stay.category != category:
            continue
        if price_min is not None and stay.price < price_min:
            continue
        if price_max is not None and stay.price > price_max:
            continue
        if rating is not None and stay.rating < rating:
            continue
        offered = {a.lower() for a in stay.amenities}
        if any(a not in offered for a in wanted):
            continue
        stays.append(stay)

    data = {"accommodations": stays, "total": len(stays), "filters": catalog.STAY_FILTERS}
    cache.set(key, data)
    return ok(data)


@router.post("/{accommodation_id}/book", status_code=201)
async def book_stay(accommodation_id: str, request: BookingRequest, user: UserProfile = Depends(get_current_user)):
    booking = get_booking_service().book(user.uid, accommodation_id, request)
    return ok({"booking": booking}, message="Booking created successfully")


@router.get("/bookings/my")
async def my_bookings(
    status: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: UserProfile = Depends(get_current_user),
):
    bookings, pagination = get_booking_service().my_bookings(user.uid, status, limit, offset)
    return ok({"bookings": bookings, "pagination": pagination})
