"""Tests for the green score."""
import pytest

from kerala_horizon.core.errors import ValidationError
from kerala_horizon.models.green_score import ActivityCategory, ActivityCreate
from kerala_horizon.services.green_score import (
    GreenScoreService,
    badge_for,
    calculate_points,
    level_for,
)
from kerala_horizon.services.store import Database


@pytest.fixture
def service():
    return GreenScoreService(database=Database())


def _activity(points: int, category: ActivityCategory = ActivityCategory.TRANSPORT, **extra) -> ActivityCreate:
    return ActivityCreate(type=category, action="test", points=points, **extra)


class TestLevelsAndBadges:
    """Test level and badge thresholds."""

    def test_levels(self):
        assert level_for(0) == 1
        assert level_for(99) == 1
        assert level_for(100) == 2
        assert level_for(1050) == 11

    def test_badges(self):
        assert badge_for(0) == "eco-explorer"
        assert badge_for(149) == "green-commuter"
        assert badge_for(250) == "nature-lover"
        assert badge_for(999) == "eco-warrior"
        assert badge_for(1000) == "carbon-neutral"


class TestCalculatePoints:
    """Test the points tables."""

    def test_transport(self):
        assert calculate_points("transport", {"mode": "cycling", "distance": 4}) == (10, 0.8)
        assert calculate_points("transport", {"mode": "public_transport"}) == (15, 0.5)
        assert calculate_points("transport", {"mode": "teleport"}) == (0, 0.0)

    def test_accommodation_per_night(self):
        assert calculate_points("accommodation", {"type": "homestay", "nights": 2}) == (50, 10.0)
        assert calculate_points("accommodation", {"type": "ktdc", "eco_certified": True}) == (25, 5.0)
        assert calculate_points("accommodation", {"type": "ktdc", "ecoCertified": True}) == (25, 5.0)

    def test_food_bonuses(self):
        assert calculate_points("food", {"type": "street_food", "local": True, "organic": True}) == (35, 6.0)

    def test_activity_and_shopping(self):
        assert calculate_points("activity", {"type": "eco_tourism", "eco_friendly": True}) == (40, 7.0)
        assert calculate_points("shopping", {"type": "artisan_shop", "local": True, "sustainable": True}) == (50, 9.0)

    def test_unknown_type(self):
        assert calculate_points("space_travel", {"type": "rocket"}) == (0, 0.0)

    @pytest.mark.parametrize("distance", [-10, 0, "far", float("inf")])
    def test_distance_must_be_positive(self, distance):
        with pytest.raises(ValidationError, match="Distance must be a positive number"):
            calculate_points("transport", {"mode": "walking", "distance": distance})

    def test_nights_must_be_positive(self):
        with pytest.raises(ValidationError, match="Nights must be a positive number"):
            calculate_points("accommodation", {"type": "homestay", "nights": -3})


class TestGreenScoreService:
    """Test the per-user profile."""

    def test_profile_created_on_first_access(self, service):
        profile = service.get_profile("u1")
        assert profile.total_score == 0
        assert profile.level == 1
        assert profile.badge == "eco-explorer"

    def test_add_activity_updates_totals(self, service):
        profile = service.add_activity("u1", _activity(60, carbon_saved=1.5))
        assert profile.total_score == 60
        assert profile.carbon_footprint == 1.5
        assert len(profile.activities) == 1
        assert "eco-explorer" in profile.achievements

        profile = service.add_activity("u1", _activity(50))
        assert profile.total_score == 110
        assert profile.level == 2
        assert profile.badge == "green-commuter"
        assert "century-club" in profile.achievements

    def test_points_from_details(self, service):
        profile = service.add_activity("u1", ActivityCreate(
            type=ActivityCategory.TRANSPORT,
            action="Cycled to Fort Kochi",
            details={"mode": "cycling", "distance": 5},
        ))
        assert profile.total_score == 10
        assert profile.carbon_footprint == 1.0

    def test_achievements_are_not_repeated(self, service):
        for _ in range(3):
            profile = service.add_activity("u1", _activity(60))
        assert profile.achievements.count("eco-explorer") == 1
        assert profile.achievements.count("century-club") == 1

    def test_category_expert(self, service):
        for _ in range(10):
            profile = service.add_activity("u1", _activity(1, ActivityCategory.FOOD))
        assert "food-expert" in profile.achievements

    def test_leaderboard_ranks_by_score(self, service):
        service.add_activity("low", _activity(10))
        service.add_activity("high", _activity(300))
        service.add_activity("mid", _activity(120))

        board = service.leaderboard(limit=2)
        assert [entry["user_id"] for entry in board] == ["high", "mid"]
        assert board[0]["rank"] == 1
        assert board[0]["badge"] == "nature-lover"

    def test_rewards(self, service):
        rewards = service.rewards(600)
        assert [(r.name, r.available) for r in rewards] == [
            ("10% off KTDC stays", True),
            ("Free eco-tour", False),
        ]
