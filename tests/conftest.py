"""Shared fixtures."""
import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LLM_PROVIDER", "mock")
os.environ.setdefault("GOOGLE_PLACES_API_KEY", "")

import pytest

from kerala_horizon.core.cache import cache
from kerala_horizon.main import limiter
from kerala_horizon.services.auth_service import get_auth_service
from kerala_horizon.services.store import db


@pytest.fixture(autouse=True)
def clean_state():
    """Every test starts with empty collections, cache and rate limit counters."""
    db.clear()
    cache.flush()
    limiter.reset()
    get_auth_service().clear_revocations()
    yield
    db.clear()
    cache.flush()
