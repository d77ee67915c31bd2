"""
Trip Planner Service - builds and maintains day-wise trip plans.

Plans are generated by the LLM and parsed into items. When the LLM is
unavailable or says nothing usable, a simple template plan is used instead.
"""
import logging
from typing import Optional

from ..core.errors import NotFoundError, PermissionDeniedError, ValidationError
from ..core.validation import parse_date, validate_trip_plan
from ..models.trip import (
    ItineraryItem,
    ItineraryItemCreate,
    ItineraryItemUpdate,
    TransportMode,
    TripPlan,
    TripPlanCreate,
    TripTemplate,
)
from .catalog import TEMPLATE_DAY_ACTIVITIES, TRIP_TEMPLATES
from .itinerary_parser import parse_ai_itinerary
from .llm_client import get_llm_client
from .store import Database, db

logger = logging.getLogger(__name__)

ITINERARY_SYSTEM_PROMPT = """You are a Kerala travel planner. Write a day-by-day itinerary.

Format every day as a header line "Day N: <place>" followed by bullet lines:
- HH:MM <activity> in <place> (₹<cost>)

Only use real places in Kerala. Keep costs in Indian rupees."""


def build_itinerary_prompt(plan: TripPlan) -> str:
    lines = [
        f"Plan a {plan.duration} days itinerary for Kerala.",
        f"Dates: {plan.start_date.isoformat()} to {plan.end_date.isoformat()}",
        f"Budget: {plan.budget:.0f} {plan.currency} for {plan.travelers} traveller(s)",
    ]
    if plan.preferences:
        lines.append(f"Preferences: {plan.preferences}")
    return "\n".join(lines)


def generate_template_itinerary(duration: int) -> list[ItineraryItem]:
    """Sample activities for days 1-3 and a free day for the rest."""
    items = []
    for day in range(1, duration + 1):
        activities = TEMPLATE_DAY_ACTIVITIES.get(day)
        if not activities:
            items.append(ItineraryItem(
                id=f"item_{len(items) + 1}",
                day=day,
                time="09:00",
                activity="Free day to explore",
                location="Kerala",
                duration="Full day",
                cost=0,
                transport=TransportMode.CAR,
            ))
            continue
        for time, activity, location, length, cost, transport in activities:
            items.append(ItineraryItem(
                id=f"item_{len(items) + 1}",
                day=day,
                time=time,
                activity=activity,
                location=location,
                duration=length,
                cost=cost,
                transport=TransportMode(transport),
            ))
    return items


def _next_item_id(plan: TripPlan) -> str:
    numbers = [
        int(item.id.split("_", 1)[1])
        for item in plan.items
        if item.id.startswith("item_") and item.id.split("_", 1)[1].isdigit()
    ]
    return f"item_{max(numbers, default=0) + 1}"


class TripPlannerService:
    """Creates trip plans and edits their itineraries."""

    def __init__(self, database: Database = db):
        self.plans = database.collection("trip_plans")

    @staticmethod
    def templates() -> list[TripTemplate]:
        return [TripTemplate.model_validate(t) for t in TRIP_TEMPLATES]

    async def generate_items(self, plan: TripPlan) -> list[ItineraryItem]:
        """Ask the LLM for an itinerary; fall back to the template plan."""
        try:
            text = await get_llm_client().chat([
                {"role": "system", "content": ITINERARY_SYSTEM_PROMPT},
                {"role": "user", "content": build_itinerary_prompt(plan)},
            ])
            items = parse_ai_itinerary(text, plan.duration)
        except Exception as e:
            logger.warning(f"AI itinerary generation failed, using template: {e}")
            return generate_template_itinerary(plan.duration)

        if not items:
            logger.warning("AI itinerary had no usable items, using template")
            return generate_template_itinerary(plan.duration)
        return items

    async def create_plan(self, user_id: str, data: TripPlanCreate) -> TripPlan:
        """
        Validate the form, generate the itinerary and store the plan.

        Raises:
            ValidationError: with per-field messages in ``details``
        """
        errors = validate_trip_plan(data.model_dump())
        if errors:
            raise ValidationError("Validation error", details=errors)

        start = parse_date(data.start_date)
        end = parse_date(data.end_date)
        plan = TripPlan(
            user_id=user_id,
            title=data.title.strip(),
            duration=data.duration or (end - start).days,
            budget=data.budget,
            travelers=data.travelers,
            start_date=start,
            end_date=end,
            currency=data.currency,
            preferences=data.preferences,
        )
        plan = plan.model_copy(update={"items": await self.generate_items(plan)}).recalculate_total()

        self.plans.add(plan.id, plan)
        logger.info(f"Created trip plan {plan.id} with {len(plan.items)} items for {user_id}")
        return plan

    def list_plans(self, user_id: str) -> list[TripPlan]:
        return sorted(self.plans.where(user_id=user_id), key=lambda p: p.created_at, reverse=True)

    def get_plan(self, user_id: str, plan_id: str) -> TripPlan:
        plan = self.plans.get(plan_id)
        if plan is None:
            raise NotFoundError("Trip plan not found")
        if plan.user_id != user_id:
            raise PermissionDeniedError("Access denied")
        return plan

    def delete_plan(self, user_id: str, plan_id: str):
        self.get_plan(user_id, plan_id)
        self.plans.delete(plan_id)

    def _save(self, plan: TripPlan, items: list[ItineraryItem]) -> TripPlan:
        updated = plan.model_copy(update={"items": items}).recalculate_total()
        self.plans.set(updated.id, updated)
        return updated

    def _check_day(self, plan: TripPlan, day: int):
        if not 1 <= day <= plan.duration:
            raise ValidationError(f"Day must be between 1 and {plan.duration}")

    def add_item(self, user_id: str, plan_id: str, data: ItineraryItemCreate) -> TripPlan:
        plan = self.get_plan(user_id, plan_id)
        self._check_day(plan, data.day)
        fields = data.model_dump()
        fields["location"] = fields["location"] or "Kerala"
        item = ItineraryItem(id=_next_item_id(plan), **fields)
        return self._save(plan, [*plan.items, item])

    def _find_item(self, plan: TripPlan, item_id: str) -> int:
        for index, item in enumerate(plan.items):
            if item.id == item_id:
                return index
        raise NotFoundError("Itinerary item not found")

    def update_item(self, user_id: str, plan_id: str, item_id: str, data: ItineraryItemUpdate) -> TripPlan:
        plan = self.get_plan(user_id, plan_id)
        index = self._find_item(plan, item_id)
        updates = data.model_dump(exclude_none=True)
        if "day" in updates:
            self._check_day(plan, updates["day"])
        items = list(plan.items)
        items[index] = items[index].model_copy(update=updates)
        return self._save(plan, items)

    def delete_item(self, user_id: str, plan_id: str, item_id: str) -> TripPlan:
        plan = self.get_plan(user_id, plan_id)
        index = self._find_item(plan, item_id)
        return self._save(plan, [item for i, item in enumerate(plan.items) if i != index])

    def toggle_item(self, user_id: str, plan_id: str, item_id: str) -> TripPlan:
        plan = self.get_plan(user_id, plan_id)
        index = self._find_item(plan, item_id)
        items = list(plan.items)
        items[index] = items[index].model_copy(update={"completed": not items[index].completed})
        return self._save(plan, items)


# Global trip planner
trip_planner: Optional[TripPlannerService] = None


def get_trip_planner() -> TripPlannerService:
    """Get or create the global trip planner."""
    global trip_planner
    if trip_planner is None:
        trip_planner = TripPlannerService()
    return trip_planner
