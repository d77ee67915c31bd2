"""
Place and listing models - stays, bookings, cultural events, community posts and saved routes.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from enum import Enum
import uuid


class GeoPoint(BaseModel):
    lat: float
    lng: float
    city: Optional[str] = None
    address: Optional[str] = None


class HotelData(BaseModel):
    """An accommodation listing."""
    id: str
    name: str
    type: str
    category: str
    rating: float
    price: float = Field(..., description="Price per room per night (INR)")
    location: GeoPoint
    amenities: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    available: bool = True
    distance: Optional[str] = None


class BookingRequest(BaseModel):
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests: Optional[int] = Field(None, ge=1)
    rooms: int = Field(default=1, ge=1)
    guest_details: list[dict] = Field(default_factory=list)


class Booking(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    accommodation_id: str
    accommodation_name: str
    check_in: date
    check_out: date
    guests: int
    rooms: int
    nights: int
    guest_details: list[dict] = Field(default_factory=list)
    total_amount: float
    status: str = "pending"
    payment_status: str = "pending"
    created_at: datetime = Field(default_factory=datetime.now)


class CulturalEvent(BaseModel):
    """A performance, festival or cultural experience."""
    id: str
    name: str
    type: str
    category: str
    description: str
    location: GeoPoint
    duration: str
    price: float
    rating: float
    next_show: Optional[datetime] = None
    month: Optional[int] = Field(None, ge=1, le=12, description="Month for annual festivals")
    includes: list[str] = Field(default_factory=list)


class CommunityPost(BaseModel):
    id: str = Field(default_factory=lambda: f"post_{uuid.uuid4().hex[:8]}")
    author_id: str
    author: str
    title: str
    content: str
    category: str = "travel_tips"
    likes: int = 0
    liked_by: list[str] = Field(default_factory=list)
    comments: int = 0
    images: list[str] = Field(default_factory=list)
    location: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)

    def public_dict(self) -> dict:
        return self.model_dump(mode="json", exclude={"liked_by"})


class PostCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    content: str = Field(..., min_length=1, max_length=2000)
    category: str = "travel_tips"
    location: Optional[str] = None
    images: list[str] = Field(default_factory=list)


class RouteMode(str, Enum):
    DRIVING = "driving"
    TRANSIT = "transit"
    BICYCLING = "bicycling"
    WALKING = "walking"


class FavoriteRoute(BaseModel):
    """A route a traveller saved for quick reuse."""
    id: str = Field(default_factory=lambda: f"route_{uuid.uuid4().hex[:8]}")
    user_id: str
    name: str
    origin: str
    destination: str
    mode: RouteMode = RouteMode.DRIVING
    preferences: dict = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)


class FavoriteRouteCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    origin: str = Field(..., min_length=1, alias="from")
    destination: str = Field(..., min_length=1, alias="to")
    mode: RouteMode = RouteMode.DRIVING
    preferences: dict = Field(default_factory=dict)
