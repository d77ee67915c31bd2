"""Tests for the trip planner service."""
from datetime import date, timedelta
from unittest.mock import AsyncMock, patch

import pytest

from kerala_horizon.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from kerala_horizon.models.trip import ItineraryItemCreate, ItineraryItemUpdate, TripPlanCreate
from kerala_horizon.services.store import Database
from kerala_horizon.services.trip_planner import TripPlannerService, generate_template_itinerary


def _request(days: int = 3, **overrides) -> TripPlanCreate:
    start = date.today() + timedelta(days=7)
    data = {
        "title": "Kerala getaway",
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=days)).isoformat(),
        "budget": 50000,
        "travelers": 2,
    }
    data.update(overrides)
    return TripPlanCreate(**data)


@pytest.fixture
def planner():
    return TripPlannerService(database=Database())


class TestTemplateItinerary:
    """Test the fallback itinerary."""

    def test_first_three_days_have_samples(self):
        items = generate_template_itinerary(4)
        assert [item.day for item in items] == [1, 1, 1, 2, 2, 3, 4]
        assert items[-1].activity == "Free day to explore"
        assert sum(item.cost for item in items) == 10400

    def test_ids_are_sequential(self):
        items = generate_template_itinerary(2)
        assert [item.id for item in items] == [f"item_{n}" for n in range(1, 6)]


class TestCreatePlan:
    """Test plan creation."""

    @pytest.mark.asyncio
    async def test_mock_llm_plan(self, planner):
        plan = await planner.create_plan("u1", _request(days=3))

        assert plan.duration == 3
        assert plan.items
        assert {item.day for item in plan.items} == {1, 2, 3}
        assert plan.total_cost == sum(item.cost for item in plan.items)
        assert planner.get_plan("u1", plan.id).id == plan.id

    @pytest.mark.asyncio
    async def test_explicit_duration_wins(self, planner):
        plan = await planner.create_plan("u1", _request(days=5, duration=2))
        assert plan.duration == 2
        assert max(item.day for item in plan.items) == 2

    @pytest.mark.asyncio
    async def test_duration_cannot_outrun_dates(self, planner):
        with pytest.raises(ValidationError) as exc_info:
            await planner.create_plan("u1", _request(days=2, duration=30))
        assert exc_info.value.details["duration"] == "Duration cannot be longer than the trip dates"
        assert planner.list_plans("u1") == []

    @pytest.mark.asyncio
    async def test_falls_back_to_template_when_llm_fails(self, planner):
        failing = AsyncMock()
        failing.chat.side_effect = RuntimeError("provider down")
        with patch("kerala_horizon.services.trip_planner.get_llm_client", return_value=failing):
            plan = await planner.create_plan("u1", _request(days=4))

        assert [item.activity for item in plan.items] == [
            item.activity for item in generate_template_itinerary(4)
        ]
        assert plan.total_cost == 10400

    @pytest.mark.asyncio
    async def test_falls_back_when_llm_says_nothing_useful(self, planner):
        quiet = AsyncMock()
        quiet.chat.return_value = "I cannot help with that."
        with patch("kerala_horizon.services.trip_planner.get_llm_client", return_value=quiet):
            plan = await planner.create_plan("u1", _request(days=1))

        assert [item.activity for item in plan.items] == [
            item.activity for item in generate_template_itinerary(1)
        ]

    @pytest.mark.asyncio
    async def test_invalid_form(self, planner):
        with pytest.raises(ValidationError) as exc_info:
            await planner.create_plan("u1", _request(budget=0))
        assert exc_info.value.details["budget"] == "Please enter a valid budget amount"


class TestPlanItems:
    """Test editing a plan's items."""

    @pytest.mark.asyncio
    async def test_add_update_toggle_delete(self, planner):
        with patch("kerala_horizon.services.trip_planner.get_llm_client", side_effect=RuntimeError("offline")):
            plan = await planner.create_plan("u1", _request(days=3))
        start_total = plan.total_cost

        plan = planner.add_item("u1", plan.id, ItineraryItemCreate(day=2, activity="Spice market", cost=300))
        added = plan.items[-1]
        assert added.location == "Kerala"
        assert plan.total_cost == start_total + 300

        plan = planner.update_item("u1", plan.id, added.id, ItineraryItemUpdate(cost=450))
        assert plan.total_cost == start_total + 450

        plan = planner.toggle_item("u1", plan.id, added.id)
        assert plan.items[-1].completed is True

        plan = planner.delete_item("u1", plan.id, added.id)
        assert plan.total_cost == start_total

    @pytest.mark.asyncio
    async def test_day_must_be_within_trip(self, planner):
        plan = await planner.create_plan("u1", _request(days=2))
        with pytest.raises(ValidationError):
            planner.add_item("u1", plan.id, ItineraryItemCreate(day=3, activity="Too late"))

    @pytest.mark.asyncio
    async def test_owner_only(self, planner):
        plan = await planner.create_plan("u1", _request(days=2))
        with pytest.raises(PermissionDeniedError):
            planner.get_plan("u2", plan.id)
        with pytest.raises(NotFoundError):
            planner.get_plan("u1", "missing")

    @pytest.mark.asyncio
    async def test_delete_plan(self, planner):
        plan = await planner.create_plan("u1", _request(days=2))
        planner.delete_plan("u1", plan.id)
        assert planner.list_plans("u1") == []
