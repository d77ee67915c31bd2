"""
External Tools Service.
Handles interactions with Open-Meteo, the exchange-rate API and Google Places and Directions.
Every call falls back to local data when the remote service fails.
"""
import httpx
import logging
from typing import Optional

from ..config import settings
from ..core.cache import cache, make_key
from ..core.errors import handle_api_error
from . import catalog

logger = logging.getLogger(__name__)

PLACES_NEARBY_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
PLACES_PHOTO_URL = "https://maps.googleapis.com/maps/api/place/photo"
DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

# INR value of one unit of each currency, used when the live rates are unavailable
FALLBACK_RATES = {
    "USD": 83.25,
    "EUR": 90.15,
    "GBP": 105.80,
    "AED": 22.65,
}


def describe_weather_code(code: int) -> str:
    """Map a WMO weather code to a short condition."""
    condition = "Clear"
    if code > 0:
        condition = "Cloudy"
    if code >= 51:
        condition = "Rainy"
    if code >= 71:
        condition = "Snowy"
    if code >= 95:
        condition = "Stormy"
    return condition


class ExternalToolsService:
    """Service to interact with external APIs."""

    def __init__(self):
        self.timeout = settings.http_timeout_seconds

    async def get_weather_forecast(self, lat: float, lng: float, days: int = 3) -> dict:
        """
        Fetch a daily forecast from Open-Meteo (no API key required).

        Returns:
            {"forecast": [...], "summary": str, "source": "open-meteo" | "fallback"}
        """
        params = {
            "latitude": lat,
            "longitude": lng,
            "daily": "weather_code,temperature_2m_max,temperature_2m_min",
            "timezone": "auto",
            "forecast_days": days,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(settings.open_meteo_url, params=params)
                response.raise_for_status()
                daily = response.json().get("daily", {})
            except (httpx.HTTPError, ValueError) as e:
                return {
                    "forecast": [],
                    "summary": "Weather data unavailable.",
                    "message": handle_api_error(e, "Weather API"),
                    "source": "fallback",
                }

        dates = daily.get("time", [])
        max_temps = daily.get("temperature_2m_max", [])
        min_temps = daily.get("temperature_2m_min", [])
        codes = daily.get("weather_code", [])

        forecast = []
        for i in range(min(len(dates), len(max_temps), len(min_temps), len(codes))):
            forecast.append({
                "date": dates[i],
                "condition": describe_weather_code(codes[i]),
                "min_temp": min_temps[i],
                "max_temp": max_temps[i],
            })

        summary = "\n".join(
            f"{day['date']}: {day['condition']} ({day['min_temp']}°C to {day['max_temp']}°C)"
            for day in forecast
        )
        return {"forecast": forecast, "summary": summary or "Weather data unavailable.", "source": "open-meteo"}

    async def get_exchange_rates(self) -> dict:
        """
        INR value of USD, EUR, GBP and AED.

        Returns:
            {"base": "INR", "rates": {...}, "source": "live" | "fallback"}
        """
        key = make_key("exchange_rates", "INR")
        cached = cache.get(key)
        if cached is not None:
            return cached

        url = f"{settings.exchange_rate_api_url.rstrip('/')}/INR"
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
                per_inr = response.json().get("rates", {})
                rates = {
                    currency: round(1 / per_inr[currency], 2)
                    for currency in FALLBACK_RATES
                    if per_inr.get(currency)
                }
            except (httpx.HTTPError, ValueError, TypeError) as e:
                return {
                    "base": "INR",
                    "rates": dict(FALLBACK_RATES),
                    "message": handle_api_error(e, "Exchange rate API"),
                    "source": "fallback",
                }

        if len(rates) < len(FALLBACK_RATES):
            logger.warning("Exchange rate API response incomplete, filling from fallback rates")
            rates = {**FALLBACK_RATES, **rates}

        result = {"base": "INR", "rates": rates, "source": "live"}
        cache.set(key, result)
        return result

    async def search_restaurants(
        self,
        lat: float,
        lng: float,
        radius: int = 5000,
        cuisine: str = "all"
    ) -> tuple[list[dict], str]:
        """
        Nearby restaurants from Google Places, or the local list.

        Returns:
            (restaurants, source) where source is "google_places" or "fallback"
        """
        api_key = settings.google_places_api_key
        if not api_key:
            logger.warning("No Google Places API key provided, using mock restaurants.")
            return catalog.restaurants_near(lat, lng), "fallback"

        params = {
            "location": f"{lat},{lng}",
            "radius": radius,
            "type": "restaurant",
            "key": api_key,
        }
        if cuisine != "all":
            params["keyword"] = cuisine

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(PLACES_NEARBY_URL, params=params)
                response.raise_for_status()
                results = response.json().get("results", [])
            except (httpx.HTTPError, ValueError) as e:
                logger.warning(f"Google Places API error, using mock data: {e}")
                return catalog.restaurants_near(lat, lng), "fallback"

        restaurants = []
        for place in results:
            location = place.get("geometry", {}).get("location", {})
            restaurants.append({
                "id": place.get("place_id"),
                "name": place.get("name"),
                "rating": place.get("rating", 0),
                "price_level": place.get("price_level", 0),
                "location": {
                    "lat": location.get("lat"),
                    "lng": location.get("lng"),
                    "address": place.get("vicinity"),
                },
                "types": place.get("types", []),
                "open_now": place.get("opening_hours", {}).get("open_now", False),
                "photos": [
                    f"{PLACES_PHOTO_URL}?maxwidth=400&photoreference={photo['photo_reference']}&key={api_key}"
                    for photo in place.get("photos", [])
                    if photo.get("photo_reference")
                ],
            })
        return restaurants, "google_places"

    async def plan_route(
        self,
        origin: str,
        destination: str,
        mode: str = "driving",
        avoid: Optional[list[str]] = None,
    ) -> tuple[Optional[dict], str]:
        """
        Directions from Google Maps, or an estimate between known destinations.

        Returns:
            (route, source) where source is "google_directions" or "estimate";
            route is None when neither can place both ends
        """
        api_key = settings.google_places_api_key
        if not api_key:
            return catalog.estimate_route(origin, destination, mode), "estimate"

        params = {"origin": origin, "destination": destination, "mode": mode, "key": api_key}
        if avoid:
            params["avoid"] = "|".join(avoid)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(DIRECTIONS_URL, params=params)
                response.raise_for_status()
                routes = response.json().get("routes", [])
                leg = routes[0]["legs"][0]
            except (httpx.HTTPError, ValueError, IndexError, KeyError) as e:
                logger.warning(f"Google Directions API error, estimating route: {e}")
                return catalog.estimate_route(origin, destination, mode), "estimate"

        return {
            "from": origin,
            "to": destination,
            "mode": mode,
            "distance": leg.get("distance"),
            "duration": leg.get("duration"),
            "steps": [
                {
                    "instruction": step.get("html_instructions"),
                    "distance": step.get("distance"),
                    "duration": step.get("duration"),
                    "coordinates": step.get("start_location"),
                }
                for step in leg.get("steps", [])
            ],
            "overview_polyline": routes[0].get("overview_polyline", {}).get("points"),
        }, "google_directions"


# Global instance
external_tools = ExternalToolsService()


def get_external_tools() -> ExternalToolsService:
    return external_tools
