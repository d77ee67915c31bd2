"""
App settings route - options the client can offer in its settings screen.
"""
from fastapi import APIRouter

from ..services import catalog
from .deps import ok

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/app")
async def app_settings():
    return ok(catalog.APP_SETTINGS)
