"""Tests for the local catalog and offline travel helpers."""
from datetime import datetime

import pytest

from kerala_horizon.services import ai_tools, catalog


class TestRouteEstimates:
    """Test straight-line distances and offline route estimates."""

    def test_distance_km(self):
        assert catalog.distance_km((9.9312, 76.2673), (9.9312, 76.2673)) == 0
        # One degree of latitude is about 111 km
        assert catalog.distance_km((10.0, 76.0), (11.0, 76.0)) == pytest.approx(111.2, abs=0.5)

    def test_estimate_route(self):
        route = catalog.estimate_route("cochin", "Munnar")
        straight = catalog.distance_km(catalog.DESTINATIONS["Kochi"], catalog.DESTINATIONS["Munnar"])

        assert route["from"] == "Kochi"
        assert route["distance"]["value"] == pytest.approx(straight * catalog.ROAD_FACTOR * 1000, abs=100)
        assert route["duration"]["value"] == pytest.approx(route["distance"]["value"] / 40 * 3.6, abs=60)
        assert route["steps"][0]["coordinates"] == {"lat": 9.9312, "lng": 76.2673}

    def test_slower_modes_take_longer(self):
        driving = catalog.estimate_route("Kochi", "Alleppey", "driving")
        cycling = catalog.estimate_route("Kochi", "Alleppey", "bicycling")
        assert cycling["distance"] == driving["distance"]
        assert cycling["duration"]["value"] > driving["duration"]["value"]

    def test_unknown_place(self):
        assert catalog.estimate_route("Kochi", "Atlantis") is None


class TestNearbyTransport:
    """Test EV, parking and traffic lookups."""

    def test_ev_connector_filter(self):
        assert len(catalog.ev_stations_near(9.93, 76.26)) == 2
        assert [s["id"] for s in catalog.ev_stations_near(9.93, 76.26, "CHAdeMO")] == ["ev_001"]

    def test_parking_kind_filter(self):
        assert [p["type"] for p in catalog.parking_near(9.93, 76.26, "paid")] == ["paid"]


class TestTravelHelpers:
    """Test budget splits, safety alerts and weather suggestions."""

    def test_budget_split_covers_everything(self):
        plan = ai_tools.optimize_expenses(12000, 3, "Munnar", travelers=2)
        assert sum(c["budget"] for c in plan["categories"].values()) == 12000
        assert plan["categories"]["food"]["per_person"] == 1800

    def test_safety_alerts_expire(self):
        now = datetime(2026, 7, 1, 9, 0)
        weather, traffic = ai_tools.safety_alerts(9.93, 76.26, now=now)
        assert weather["valid_until"] == "2026-07-01T15:00:00"
        assert traffic["valid_until"] == "2026-07-01T11:00:00"

    @pytest.mark.parametrize("condition", ["Rainy", "Stormy"])
    def test_wet_weather_moves_indoors(self, condition):
        data = ai_tools.weather_recommendations(condition)
        assert "Umbrella" in data["clothing"]
        assert all("Beach" not in r["location"] for r in data["recommendations"])

    def test_dry_weather(self):
        data = ai_tools.weather_recommendations("Cloudy")
        assert data["recommendations"][0]["activity"] == "Beach visit"
