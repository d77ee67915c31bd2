"""
Green score models - eco-friendly activity tracking.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum
import uuid


class ActivityCategory(str, Enum):
    TRANSPORT = "transport"
    ACCOMMODATION = "accommodation"
    FOOD = "food"
    ACTIVITY = "activity"
    SHOPPING = "shopping"


class GreenActivity(BaseModel):
    """One eco-friendly choice and the points it earned."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: ActivityCategory
    action: str
    points: int = Field(..., ge=0)
    description: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)
    location: Optional[str] = None
    carbon_saved: Optional[float] = Field(None, ge=0, description="kg CO2")


class GreenScoreProfile(BaseModel):
    """Running green score tally for a user."""
    user_id: str
    total_score: int = 0
    level: int = 1
    badge: str = "eco-explorer"
    activities: list[GreenActivity] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    carbon_footprint: float = Field(default=0.0, description="Total kg CO2 saved")
    last_updated: datetime = Field(default_factory=datetime.now)


class GreenBadge(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    required_score: int
    category: str


class GreenReward(BaseModel):
    name: str
    points: int
    available: bool = False


class ActivityCreate(BaseModel):
    type: ActivityCategory
    action: str = Field(..., min_length=1)
    description: str = ""
    location: Optional[str] = None
    points: Optional[int] = Field(None, ge=0)
    carbon_saved: Optional[float] = Field(None, ge=0)
    details: Optional[dict] = Field(
        None,
        description="Inputs for server-side point calculation, e.g. {'mode': 'cycling', 'distance': 4}"
    )


class PointsRequest(BaseModel):
    type: str
    details: dict = Field(default_factory=dict)
