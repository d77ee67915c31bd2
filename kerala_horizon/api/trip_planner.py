"""
Trip planner routes - plans, itinerary items, templates and exchange rates.
"""
from fastapi import APIRouter, Depends

from ..models.trip import ItineraryItemCreate, ItineraryItemUpdate, ParseRequest, TripPlanCreate
from ..models.user import UserProfile
from ..services.external_tools import get_external_tools
from ..services.itinerary_parser import parse_ai_itinerary
from ..services.trip_planner import get_trip_planner
from .deps import get_current_user, ok

router = APIRouter(prefix="/api/trip-planner", tags=["trip-planner"])


@router.get("/templates")
async def list_templates():
    return ok({"templates": get_trip_planner().templates()})


@router.post("/plans", status_code=201)
async def create_plan(request: TripPlanCreate, user: UserProfile = Depends(get_current_user)):
    """Create a plan; the itinerary comes from the LLM or the template generator."""
    plan = await get_trip_planner().create_plan(user.uid, request)
    return ok({"plan": plan}, message="Trip plan created successfully")


@router.get("/plans")
async def list_plans(user: UserProfile = Depends(get_current_user)):
    return ok({"plans": get_trip_planner().list_plans(user.uid)})


@router.get("/plans/{plan_id}")
async def get_plan(plan_id: str, user: UserProfile = Depends(get_current_user)):
    return ok({"plan": get_trip_planner().get_plan(user.uid, plan_id)})


@router.delete("/plans/{plan_id}")
async def delete_plan(plan_id: str, user: UserProfile = Depends(get_current_user)):
    get_trip_planner().delete_plan(user.uid, plan_id)
    return ok(message="Trip plan deleted successfully")


@router.post("/plans/{plan_id}/items", status_code=201)
async def add_item(plan_id: str, item: ItineraryItemCreate, user: UserProfile = Depends(get_current_user)):
    plan = get_trip_planner().add_item(user.uid, plan_id, item)
    return ok({"plan": plan}, message="Item added successfully")


@router.put("/plans/{plan_id}/items/{item_id}")
async def update_item(
    plan_id: str,
    item_id: str,
    updates: ItineraryItemUpdate,
    user: UserProfile = Depends(get_current_user),
):
    plan = get_trip_planner().update_item(user.uid, plan_id, item_id, updates)
    return ok({"plan": plan}, message="Item updated successfully")


@router.delete("/plans/{plan_id}/items/{item_id}")
async def delete_item(plan_id: str, item_id: str, user: UserProfile = Depends(get_current_user)):
    plan = get_trip_planner().delete_item(user.uid, plan_id, item_id)
    return ok({"plan": plan}, message="Item deleted successfully")


@router.post("/plans/{plan_id}/items/{item_id}/toggle")
async def toggle_item(plan_id: str, item_id: str, user: UserProfile = Depends(get_current_user)):
    plan = get_trip_planner().toggle_item(user.uid, plan_id, item_id)
    return ok({"plan": plan})


@router.post("/parse")
async def parse_itinerary(request: ParseRequest):
    """Turn free itinerary text into structured items."""
    items = parse_ai_itinerary(request.text, request.duration)
    return ok({
        "items": items,
        "total_cost": sum(item.cost for item in items),
    })


@router.get("/exchange-rates")
async def exchange_rates():
    return ok(await get_external_tools().get_exchange_rates())
