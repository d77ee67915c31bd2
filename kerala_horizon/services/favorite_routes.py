"""
Saved transport routes.
"""
import logging

from ..models.places import FavoriteRoute, FavoriteRouteCreate
from .store import Database, db

logger = logging.getLogger(__name__)


class FavoriteRouteService:
    def __init__(self, database: Database = db):
        self.routes = database.collection("transport")

    def save(self, user_id: str, data: FavoriteRouteCreate) -> FavoriteRoute:
        route = FavoriteRoute(user_id=user_id, **data.model_dump())
        self.routes.add(route.id, route)
        logger.info(f"Route {route.id} saved by {user_id}")
        return route

    def list_for(self, user_id: str) -> list[FavoriteRoute]:
        """The user's saved routes, newest first."""
        return sorted(self.routes.where(user_id=user_id), key=lambda r: r.created_at, reverse=True)


favorite_route_service = FavoriteRouteService()


def get_favorite_route_service() -> FavoriteRouteService:
    return favorite_route_service
