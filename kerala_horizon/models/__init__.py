"""Data models for the Kerala Horizon API."""
from .user import UserProfile, UserPreferences
from .document import Document, DocumentShare, ExtractedData, ExpiryStatus
from .trip import TripPlan, ItineraryItem, TripTemplate, TransportMode
from .green_score import GreenScoreProfile, GreenActivity, GreenBadge
from .wallet import Wallet, Transaction
from .places import HotelData, Booking, CulturalEvent, CommunityPost

__all__ = [
    "UserProfile",
    "UserPreferences",
    "Document",
    "DocumentShare",
    "ExtractedData",
    "ExpiryStatus",
    "TripPlan",
    "ItineraryItem",
    "TripTemplate",
    "TransportMode",
    "GreenScoreProfile",
    "GreenActivity",
    "GreenBadge",
    "Wallet",
    "Transaction",
    "HotelData",
    "Booking",
    "CulturalEvent",
    "CommunityPost",
]
