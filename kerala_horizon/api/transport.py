"""
Transport routes - nearby hubs, buses, trains, flights, cabs, ferries, EV charging, parking and route planning.
"""
from datetime import date as date_type, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.cache import cache, make_key
from ..core.errors import NotFoundError, ValidationError
from ..models.places import FavoriteRouteCreate, RouteMode
from ..models.user import UserProfile
from ..services import catalog
from ..services.external_tools import get_external_tools
from ..services.favorite_routes import get_favorite_route_service
from .deps import get_current_user, ok, require_coordinates

router = APIRouter(prefix="/api/transport", tags=["transport"])

# Live positions go stale quickly
TRACKING_TTL_SECONDS = 30


def _cached(key: str):
    data = cache.get(key)
    return ok(data, cached=True) if data is not None else None


def _require_route(origin: Optional[str], destination: Optional[str]):
    if not origin or not destination:
        raise ValidationError("From and to locations are required")


@router.get("/location")
async def transport_near(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius: int = Query(5000, ge=1000, le=50000),
):
    """Bus and train stations, airports, EV chargers and parking around a point."""
    key = make_key("location", lat, lng, radius)
    hit = _cached(key)
    if hit is not None:
        return hit

    data = {
        "coordinates": {"lat": lat, "lng": lng},
        "radius": radius,
        "transport_options": catalog.transport_hubs_near(lat, lng),
        "timestamp": datetime.now().isoformat(),
    }
    cache.set(key, data)
    return ok(data)


@router.get("/bus/routes")
async def bus_routes(
    origin: Optional[str] = Query(None, alias="from"),
    destination: Optional[str] = Query(None, alias="to"),
    date: Optional[date_type] = None,
):
    _require_route(origin, destination)
    travel_date = date or date_type.today()
    key = make_key("bus_routes", origin, destination, travel_date)
    hit = _cached(key)
    if hit is not None:
        return hit

    data = {
        "from": origin,
        "to": destination,
        "date": travel_date.isoformat(),
        "routes": [{**route, "from": origin, "to": destination} for route in catalog.BUS_ROUTES],
    }
    cache.set(key, data)
    return ok(data)


@router.get("/bus/tracking")
async def bus_tracking(route_id: Optional[str] = None, bus_number: Optional[str] = None):
    if not route_id and not bus_number:
        raise ValidationError("Route ID or Bus Number is required")
    key = make_key("bus_tracking", route_id, bus_number)
    hit = _cached(key)
    if hit is not None:
        return hit

    lat, lng = catalog.DESTINATIONS["Kochi"]
    data = {
        "route_id": route_id or "R001",
        "bus_number": bus_number or "KL-01-AB-1234",
        "current_location": {"lat": lat, "lng": lng},
        "next_stop": "Kochi Metro Station",
        "estimated_arrival": "5 minutes",
        "status": "on_time",
        "speed": "45 km/h",
        "last_updated": datetime.now().isoformat(),
    }
    cache.set(key, data, ttl_seconds=TRACKING_TTL_SECONDS)
    return ok(data)


@router.get("/train/schedules")
async def train_schedules(
    origin: Optional[str] = Query(None, alias="from"),
    destination: Optional[str] = Query(None, alias="to"),
    date: Optional[date_type] = None,
):
    _require_route(origin, destination)
    travel_date = date or date_type.today()
    key = make_key("train_schedules", origin, destination, travel_date)
    hit = _cached(key)
    if hit is not None:
        return hit

    data = {
        "from": origin,
        "to": destination,
        "date": travel_date.isoformat(),
        "trains": [{**train, "from": origin, "to": destination} for train in catalog.TRAIN_SCHEDULES],
    }
    cache.set(key, data)
    return ok(data)


@router.get("/flight/status")
async def flight_status(flight_number: Optional[str] = None, airport: Optional[str] = None):
    if not flight_number and not airport:
        raise ValidationError("Flight number or airport code is required")
    key = make_key("flight_status", flight_number, airport)
    hit = _cached(key)
    if hit is not None:
        return hit

    flights = catalog.FLIGHTS
    if flight_number:
        flights = [f for f in flights if f["flight_number"].lower() == flight_number.lower()]
    if airport:
        flights = [f for f in flights if f["departure_airport"].lower() == airport.lower()]

    data = {"flights": flights, "total": len(flights)}
    cache.set(key, data, ttl_seconds=TRACKING_TTL_SECONDS)
    return ok(data)


@router.get("/cab/estimate")
async def cab_estimate(
    origin: Optional[str] = Query(None, alias="from"),
    destination: Optional[str] = Query(None, alias="to"),
    service: Optional[str] = None,
):
    _require_route(origin, destination)
    key = make_key("cab_estimate", origin, destination, service or "all")
    hit = _cached(key)
    if hit is not None:
        return hit

    services = catalog.CAB_SERVICES
    if service:
        services = [s for s in services if s["service"].lower() == service.lower()]

    data = {
        "from": origin,
        "to": destination,
        "services": services,
        "timestamp": datetime.now().isoformat(),
    }
    cache.set(key, data)
    return ok(data)


@router.get("/water/schedules")
async def water_schedules(
    origin: Optional[str] = Query(None, alias="from"),
    destination: Optional[str] = Query(None, alias="to"),
    date: Optional[date_type] = None,
):
    """Water metro and ferry departures; defaults to the Vypin - Fort Kochi crossing."""
    origin = origin or "Vypin"
    destination = destination or "Fort Kochi"
    travel_date = date or date_type.today()
    return ok({
        "from": origin,
        "to": destination,
        "date": travel_date.isoformat(),
        "schedules": [{**s, "from": origin, "to": destination} for s in catalog.WATER_SCHEDULES],
    })


@router.get("/ev/stations")
async def ev_stations(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    connector_type: str = "all",
):
    lat, lng = require_coordinates(lat, lng)
    return ok({"stations": catalog.ev_stations_near(lat, lng, connector_type)})


@router.get("/parking/spots")
async def parking_spots(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    kind: str = Query("all", alias="type"),
):
    lat, lng = require_coordinates(lat, lng)
    return ok({"spots": catalog.parking_near(lat, lng, kind)})


@router.get("/traffic/alerts")
async def traffic_alerts(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
):
    """Congestion and incidents; centred on Kochi when no point is given."""
    if lat is None or lng is None:
        lat, lng = catalog.DESTINATIONS["Kochi"]
    alerts = catalog.traffic_alerts_near(lat, lng)
    return ok({"alerts": alerts, "total": len(alerts)})


@router.get("/route/plan")
async def plan_route(
    origin: Optional[str] = Query(None, alias="from"),
    destination: Optional[str] = Query(None, alias="to"),
    mode: RouteMode = RouteMode.DRIVING,
    avoid: Optional[list[str]] = Query(None),
):
    _require_route(origin, destination)
    avoid = avoid or []
    key = make_key("route_plan", origin.lower(), destination.lower(), mode.value, ",".join(sorted(avoid)))
    hit = _cached(key)
    if hit is not None:
        return hit

    route, source = await get_external_tools().plan_route(origin, destination, mode.value, avoid)
    if route is None:
        raise NotFoundError(f"No route found from {origin} to {destination}")
    data = {"route": route, "source": source}
    cache.set(key, data)
    return ok(data)


@router.post("/route/favorite", status_code=201)
async def save_favorite_route(route: FavoriteRouteCreate, user: UserProfile = Depends(get_current_user)):
    saved = get_favorite_route_service().save(user.uid, route)
    return ok({"route": saved}, message="Route saved to favorites")


@router.get("/route/favorites")
async def favorite_routes(user: UserProfile = Depends(get_current_user)):
    return ok({"routes": get_favorite_route_service().list_for(user.uid)})
