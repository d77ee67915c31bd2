"""
Trip planner models - plans, itinerary items and templates.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from enum import Enum
import uuid


class TransportMode(str, Enum):
    """How the traveller gets to an itinerary item."""
    WALKING = "walking"
    CAR = "car"
    TRAIN = "train"
    FLIGHT = "flight"
    SHIP = "ship"


class ItineraryItem(BaseModel):
    """A single activity in a trip plan."""
    id: str = Field(..., description="Identifier, unique within the plan")
    day: int = Field(..., ge=1, description="Day number in the trip")
    time: str = Field(default="09:00", description="Start time, HH:MM")
    activity: str = Field(..., description="What to do")
    location: str = Field(default="Kerala", description="Where it happens")
    duration: str = Field(default="2 hours")
    cost: float = Field(default=0.0, ge=0, description="Estimated cost in the plan currency")
    transport: TransportMode = TransportMode.CAR
    notes: str = ""
    completed: bool = False


class TripPlan(BaseModel):
    """A user's trip with its day-wise itinerary."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    title: str
    duration: int = Field(..., ge=1, description="Number of days")
    budget: float = Field(..., gt=0)
    travelers: int = Field(default=1, ge=1, le=50)
    start_date: date
    end_date: date
    items: list[ItineraryItem] = Field(default_factory=list)
    total_cost: float = 0.0
    currency: str = "INR"
    preferences: str = ""
    created_at: datetime = Field(default_factory=datetime.now)

    def recalculate_total(self) -> "TripPlan":
        """Return a copy whose total_cost is the sum of item costs."""
        return self.model_copy(update={"total_cost": sum(item.cost for item in self.items)})


class TripPlanCreate(BaseModel):
    title: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    budget: Optional[float] = None
    travelers: Optional[int] = 1
    duration: Optional[int] = Field(None, ge=1, le=365)
    currency: str = "INR"
    preferences: str = ""


class ItineraryItemCreate(BaseModel):
    day: int = Field(..., ge=1)
    time: str = Field(default="09:00", pattern=r"^\d{2}:\d{2}$")
    activity: str = Field(..., min_length=1)
    location: str = ""
    duration: str = "2 hours"
    cost: float = Field(default=0.0, ge=0)
    transport: TransportMode = TransportMode.CAR
    notes: str = ""


class ItineraryItemUpdate(BaseModel):
    day: Optional[int] = Field(None, ge=1)
    time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    activity: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    duration: Optional[str] = None
    cost: Optional[float] = Field(None, ge=0)
    transport: Optional[TransportMode] = None
    notes: Optional[str] = None
    completed: Optional[bool] = None


class ParseRequest(BaseModel):
    text: str
    duration: int = Field(..., ge=1, le=365)


class TripTemplate(BaseModel):
    """A ready-made Kerala route."""
    id: str
    name: str
    duration: str
    budget: str
    destinations: list[str]
    highlights: list[str]
    estimated_cost: int
    difficulty: str
