"""API routers for the Kerala Horizon API."""
from . import (
    ai,
    app_settings,
    auth,
    community,
    culture,
    documents,
    food,
    shopping,
    sos,
    stay,
    sustainability,
    transport,
    trip_planner,
    wallet,
)

routers = [
    auth.router,
    auth.user_router,
    documents.router,
    sustainability.router,
    trip_planner.router,
    wallet.router,
    stay.router,
    food.router,
    culture.router,
    transport.router,
    community.router,
    sos.router,
    shopping.router,
    app_settings.router,
    ai.router,
]

__all__ = ["routers"]
