"""
Process-local response cache with a fixed time-to-live.

Entries live for exactly `ttl_seconds` from insertion. There is no
invalidation API; staleness is resolved purely by expiry. Each instance is
independent, so horizontally scaled deployments hold separate caches.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cachetools import TTLCache as _TTLCache

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 10_000


@dataclass
class CacheEntry:
    value: Any
    stored_at: float


class TTLCache:
    """Key to value mapping with a fixed TTL, bounded at `max_entries`."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic, name: str = "cache",
                 max_entries: int = DEFAULT_MAX_ENTRIES):
        self.ttl_seconds = ttl_seconds
        self.name = name
        self._entries = _TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=clock)

    def get(self, key: str) -> Optional[Any]:
        value = self._entries.get(key)
        if value is not None:
            logger.debug(f"{self.name} cache HIT for {key}")
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def __len__(self) -> int:
        return len(self._entries)


def make_cache_key(route: str, **params) -> str:
    """Build a cache key from a route name and its request parameters."""
    base = route.strip("/").replace("/", ":")
    parts = [f"{k}={v}" for k, v in sorted(params.items()) if v is not None]
    if parts:
        return f"{base}:{':'.join(parts)}"
    return base
