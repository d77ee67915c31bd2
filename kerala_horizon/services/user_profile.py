"""
User Profile Service - achievements, travel history, last known location
and nearby picks.

Reads across the green score, community, wallet and trip planner collections
to build a traveller's summary.
"""
import logging
from datetime import datetime

from ..core.errors import NotFoundError
from ..models.user import LocationUpdate, UserLocation, UserProfile
from ..models.wallet import TransactionStatus, TransactionType
from . import catalog
from .green_score import BADGES
from .store import Database, db

logger = logging.getLogger(__name__)

BADGE_IDS = {badge.id for badge in BADGES}


class UserProfileService:
    def __init__(self, database: Database = db):
        self.users = database.collection("users")
        self.green_scores = database.collection("green_scores")
        self.posts = database.collection("community")
        self.transactions = database.collection("transactions")
        self.wallets = database.collection("wallets")
        self.plans = database.collection("trip_plans")

    def achievements(self, user_id: str) -> dict:
        """Green score, community and wallet milestones in one summary."""
        profile = self.green_scores.get(user_id)
        posts = self.posts.where(author_id=user_id)
        completed = self.transactions.where(user_id=user_id, status=TransactionStatus.COMPLETED)
        wallet = self.wallets.get(user_id)

        return {
            "sustainability": {
                "green_score": profile.total_score if profile else 0,
                "level": profile.level if profile else 1,
                "badges": [a for a in profile.achievements if a in BADGE_IDS] if profile else [],
                "achievements": profile.achievements if profile else [],
                "carbon_saved": profile.carbon_footprint if profile else 0.0,
            },
            "community": {
                "posts_count": len(posts),
                "likes_received": sum(post.likes for post in posts),
                "contributions": len(posts),
            },
            "wallet": {
                "total_spent": round(sum(t.amount for t in completed if t.type == TransactionType.DEBIT), 2),
                "total_added": round(sum(t.amount for t in completed if t.type == TransactionType.CREDIT), 2),
                "transactions_count": len(completed),
                "balance": wallet.balance if wallet else 0.0,
            },
        }

    def travel_history(self, user_id: str, page: int = 1, limit: int = 20) -> tuple[list[dict], dict]:
        """The user's trip plans newest first, one page at a time."""
        plans = sorted(self.plans.where(user_id=user_id), key=lambda p: p.created_at, reverse=True)
        offset = (page - 1) * limit
        trips = [
            {
                "id": plan.id,
                "title": plan.title,
                "start_date": plan.start_date,
                "end_date": plan.end_date,
                "duration": plan.duration,
                "total_cost": plan.total_cost,
                "currency": plan.currency,
                "created_at": plan.created_at,
            }
            for plan in plans[offset:offset + limit]
        ]
        return trips, {
            "page": page,
            "limit": limit,
            "total": len(plans),
            "has_more": len(plans) > offset + limit,
        }

    def update_location(self, user_id: str, request: LocationUpdate) -> UserProfile:
        if self.users.get(user_id) is None:
            raise NotFoundError("User not found")
        location = UserLocation(lat=request.lat, lng=request.lng, address=request.address or "")
        logger.debug(f"Location for {user_id} set to {location.lat},{location.lng}")
        return self.users.update(user_id, current_location=location, updated_at=datetime.now())

    def recommendations(self, lat: float, lng: float, limit: int = 5) -> dict:
        """Places to eat, see, stay and catch transport around a point."""
        hubs = catalog.transport_hubs_near(lat, lng)
        return {
            "restaurants": catalog.restaurants_near(lat, lng)[:limit],
            "attractions": catalog.experiences_near(lat, lng)[:limit],
            "accommodations": catalog.accommodations_near(lat, lng)[:limit],
            "transport": hubs["bus_stations"] + hubs["train_stations"],
        }


user_profile_service = UserProfileService()


def get_user_profile_service() -> UserProfileService:
    return user_profile_service
