"""
User models - profiles, preferences and auth payloads.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum
import uuid


class Language(str, Enum):
    ENGLISH = "en"
    HINDI = "hi"
    MALAYALAM = "ml"
    TAMIL = "ta"
    ARABIC = "ar"
    GERMAN = "de"


class Currency(str, Enum):
    INR = "INR"
    USD = "USD"
    EUR = "EUR"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class AccessibilityPreferences(BaseModel):
    """Display and navigation aids."""
    font_size: str = Field(default="medium", pattern="^(small|medium|large)$")
    contrast: str = Field(default="normal", pattern="^(normal|high)$")
    voice_navigation: bool = False


class UserPreferences(BaseModel):
    """App-wide preferences for a traveller."""
    language: Language = Language.ENGLISH
    currency: Currency = Currency.INR
    notifications: bool = True
    theme: Theme = Theme.AUTO
    accessibility: AccessibilityPreferences = Field(default_factory=AccessibilityPreferences)


class UserLocation(BaseModel):
    """Last position reported by the traveller's device."""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address: str = ""
    updated_at: datetime = Field(default_factory=datetime.now)


class UserProfile(BaseModel):
    """A registered traveller."""
    uid: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique user identifier"
    )
    email: str = Field(..., description="Login email, stored lower-cased")
    name: str = Field(..., description="Display name")
    phone: Optional[str] = Field(None, description="10-digit Indian mobile number")
    password_hash: str = Field(..., exclude=True, description="bcrypt hash of the password")
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    profile_picture: Optional[str] = None
    upi_id: Optional[str] = Field(None, description="Saved UPI id used as a payment method")
    current_location: Optional[UserLocation] = None
    green_score: int = 0
    achievements: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    last_login_at: Optional[datetime] = None

    def public_dict(self) -> dict:
        """Profile fields safe to return to the client."""
        return {
            "uid": self.uid,
            "email": self.email,
            "name": self.name,
            "phone": self.phone,
            "preferences": self.preferences.model_dump(mode="json"),
            "profile_picture": self.profile_picture,
            "upi_id": self.upi_id,
            "green_score": self.green_score,
            "achievements": self.achievements,
            "current_location": self.current_location.model_dump(mode="json") if self.current_location else None,
        }


class RegisterRequest(BaseModel):
    email: str
    password: str
    name: str
    phone: Optional[str] = None
    preferences: Optional[UserPreferences] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class ResetPasswordRequest(BaseModel):
    email: str


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    profile_picture: Optional[str] = None
    upi_id: Optional[str] = None


class LocationUpdate(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address: Optional[str] = Field(None, max_length=200)
