"""
Small TTL cache for search responses.
"""
import logging
import threading
from datetime import datetime, timedelta
from typing import Any, Optional

from ..config import settings

logger = logging.getLogger(__name__)


class TTLCache:
    """In-memory key/value cache whose entries expire after a TTL."""

    def __init__(self, default_ttl_seconds: int = 300):
        self.default_ttl_seconds = default_ttl_seconds
        self._entries: dict[str, tuple[Any, datetime]] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, dropping it if it has expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if datetime.now() >= expires_at:
                del self._entries[key]
                logger.debug(f"Cache expired for {key}")
                return None
            logger.debug(f"Cache hit for {key}")
            return value

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = (value, datetime.now() + timedelta(seconds=ttl))

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def flush(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> list[str]:
        with self._lock:
            return [key for key in list(self._entries) if self.has(key)]


def make_key(prefix: str, *parts: Any) -> str:
    """Build a cache key like ``stay_search_9.93_76.26_all``."""
    return "_".join([prefix, *(str(p) for p in parts)])


# Global cache instance
cache = TTLCache(default_ttl_seconds=settings.cache_ttl_seconds)
