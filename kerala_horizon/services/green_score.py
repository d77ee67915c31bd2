"""
Green Score Service - points, levels and badges for eco-friendly travel.
"""
import logging
import math
from collections import Counter
from datetime import datetime
from typing import Optional

from ..core.errors import ValidationError
from ..models.green_score import ActivityCreate, GreenActivity, GreenBadge, GreenReward, GreenScoreProfile
from .store import Database, db

logger = logging.getLogger(__name__)

POINTS_PER_LEVEL = 100
CATEGORY_EXPERT_COUNT = 10

BADGES = [
    GreenBadge(id="eco-explorer", name="Eco Explorer", description="Started your green journey",
               icon="🌱", required_score=50, category="overall"),
    GreenBadge(id="green-commuter", name="Green Commuter", description="Used eco-friendly transport",
               icon="🚲", required_score=100, category="transport"),
    GreenBadge(id="sustainable-stayer", name="Sustainable Stayer", description="Chose eco-friendly accommodation",
               icon="🏨", required_score=150, category="accommodation"),
    GreenBadge(id="local-foodie", name="Local Foodie", description="Supported local and organic food",
               icon="🍃", required_score=200, category="food"),
    GreenBadge(id="nature-lover", name="Nature Lover", description="Engaged in eco-friendly activities",
               icon="🌿", required_score=250, category="activity"),
    GreenBadge(id="eco-warrior", name="Eco Warrior", description="Champion of sustainable travel",
               icon="🛡️", required_score=500, category="overall"),
    GreenBadge(id="carbon-neutral", name="Carbon Neutral", description="Achieved carbon neutral travel",
               icon="⚖️", required_score=1000, category="overall"),
]

MILESTONES = [
    (100, "century-club"),
    (500, "half-millennium"),
    (1000, "millennium-master"),
]

REWARDS = [
    ("10% off KTDC stays", 500),
    ("Free eco-tour", 1000),
]

# mode: (points, kg CO2 saved per km)
TRANSPORT_POINTS = {
    "walking": (5, 0.1),
    "cycling": (10, 0.2),
    "public_transport": (15, 0.5),
    "electric_vehicle": (20, 0.8),
    "shared_ride": (8, 0.3),
    "private_car": (2, 0.1),
}

# type: (points, kg CO2 saved) per night
ACCOMMODATION_POINTS = {
    "homestay": (25, 5),
    "eco_resort": (30, 8),
    "ktdc": (15, 3),
    "budget_hotel": (10, 2),
    "luxury_hotel": (5, 1),
}

FOOD_POINTS = {
    "local_restaurant": (15, 2),
    "street_food": (20, 3),
    "organic_restaurant": (25, 4),
    "chain_restaurant": (5, 1),
}

ACTIVITY_POINTS = {
    "nature_trail": (20, 3),
    "cultural_heritage": (15, 2),
    "eco_tourism": (30, 5),
    "adventure_sport": (10, 1),
    "shopping_mall": (2, 0),
}

SHOPPING_POINTS = {
    "local_market": (20, 3),
    "artisan_shop": (25, 4),
    "souvenir_shop": (10, 1),
    "chain_store": (2, 0),
}


def level_for(total_score: int) -> int:
    return total_score // POINTS_PER_LEVEL + 1


def badge_for(total_score: int) -> str:
    """Highest badge whose required score has been reached."""
    earned = [b for b in BADGES if total_score >= b.required_score]
    if not earned:
        return "eco-explorer"
    return max(earned, key=lambda b: b.required_score).id


def check_achievements(profile: GreenScoreProfile) -> list[str]:
    """Achievements the profile qualifies for and does not have yet."""
    new = []
    if profile.badge in {b.id for b in BADGES} and profile.badge not in profile.achievements:
        new.append(profile.badge)
    for threshold, name in MILESTONES:
        if profile.total_score >= threshold and name not in profile.achievements:
            new.append(name)
    counts = Counter(activity.type.value for activity in profile.activities)
    for category, count in counts.items():
        name = f"{category}-expert"
        if count >= CATEGORY_EXPERT_COUNT and name not in profile.achievements:
            new.append(name)
    return new


def _flag(details: dict, *names: str) -> bool:
    return any(bool(details.get(name)) for name in names)


def _positive(details: dict, name: str) -> float:
    """A distance or night count from the details; 1 when it is not given."""
    value = details.get(name)
    if value is None:
        return 1
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = math.nan
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{name.capitalize()} must be a positive number")
    return number


def calculate_points(activity_type: str, details: Optional[dict] = None) -> tuple[int, float]:
    """
    Points and kg CO2 saved for an activity.

    Args:
        activity_type: transport, accommodation, food, activity or shopping
        details: Type-specific inputs, e.g. {"mode": "cycling", "distance": 4}

    Returns:
        (points, carbon_saved); (0, 0) for anything unrecognised
    """
    details = details or {}

    if activity_type == "transport":
        rate = TRANSPORT_POINTS.get(details.get("mode"))
        if rate is None:
            return 0, 0.0
        points, per_km = rate
        return points, round(per_km * _positive(details, "distance"), 2)

    if activity_type == "accommodation":
        points, carbon = ACCOMMODATION_POINTS.get(details.get("type"), (0, 0))
        if _flag(details, "eco_certified", "ecoCertified"):
            points += 10
            carbon += 2
        nights = max(int(_positive(details, "nights")), 1)
        return points * nights, float(carbon * nights)

    if activity_type == "food":
        points, carbon = FOOD_POINTS.get(details.get("type"), (0, 0))
        if _flag(details, "local"):
            points += 5
            carbon += 1
        if _flag(details, "organic"):
            points += 10
            carbon += 2
        return points, float(carbon)

    if activity_type == "activity":
        points, carbon = ACTIVITY_POINTS.get(details.get("type"), (0, 0))
        if _flag(details, "eco_friendly", "ecoFriendly"):
            points += 10
            carbon += 2
        return points, float(carbon)

    if activity_type == "shopping":
        points, carbon = SHOPPING_POINTS.get(details.get("type"), (0, 0))
        if _flag(details, "local"):
            points += 10
            carbon += 2
        if _flag(details, "sustainable"):
            points += 15
            carbon += 3
        return points, float(carbon)

    return 0, 0.0


class GreenScoreService:
    """Keeps one green score profile per user."""

    def __init__(self, database: Database = db):
        self.profiles = database.collection("green_scores")
        self.users = database.collection("users")

    def get_profile(self, user_id: str) -> GreenScoreProfile:
        """Return the user's profile, creating an empty one on first access."""
        profile = self.profiles.get(user_id)
        if profile is None:
            profile = GreenScoreProfile(user_id=user_id)
            self.profiles.set(user_id, profile)
            logger.info(f"Created green score profile for {user_id}")
        return profile

    def add_activity(self, user_id: str, data: ActivityCreate) -> GreenScoreProfile:
        """Record an activity and recompute level, badge and achievements."""
        points, carbon_saved = data.points, data.carbon_saved
        if data.details is not None:
            calculated_points, calculated_carbon = calculate_points(data.type.value, data.details)
            points = calculated_points if points is None else points
            carbon_saved = calculated_carbon if carbon_saved is None else carbon_saved

        activity = GreenActivity(
            type=data.type,
            action=data.action,
            points=points or 0,
            description=data.description,
            location=data.location,
            carbon_saved=carbon_saved,
        )

        profile = self.get_profile(user_id)
        total = profile.total_score + activity.points
        updated = profile.model_copy(update={
            "total_score": total,
            "activities": [*profile.activities, activity],
            "carbon_footprint": round(profile.carbon_footprint + (activity.carbon_saved or 0), 2),
            "level": level_for(total),
            "badge": badge_for(total),
            "last_updated": datetime.now(),
        })
        new_achievements = check_achievements(updated)
        updated = updated.model_copy(update={
            "achievements": list(dict.fromkeys([*profile.achievements, *new_achievements])),
        })
        self.profiles.set(user_id, updated)

        if new_achievements:
            logger.info(f"User {user_id} unlocked {new_achievements}")
        # Mirror the score onto the user profile when the user is registered
        self.users.update(user_id, green_score=updated.total_score, achievements=updated.achievements)
        return updated

    def leaderboard(self, limit: int = 10) -> list[dict]:
        ranked = sorted(self.profiles.all(), key=lambda p: p.total_score, reverse=True)[:limit]
        entries = []
        for rank, profile in enumerate(ranked, start=1):
            user = self.users.get(profile.user_id)
            entries.append({
                "rank": rank,
                "user_id": profile.user_id,
                "name": user.name if user else None,
                "score": profile.total_score,
                "badge": profile.badge,
            })
        return entries

    @staticmethod
    def rewards(total_score: int) -> list[GreenReward]:
        return [
            GreenReward(name=name, points=points, available=total_score >= points)
            for name, points in REWARDS
        ]

    @staticmethod
    def badges() -> list[GreenBadge]:
        return list(BADGES)


# Global green score service
green_score_service = GreenScoreService()


def get_green_score_service() -> GreenScoreService:
    return green_score_service
