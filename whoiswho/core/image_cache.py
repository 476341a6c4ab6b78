"""
Memoization for rendered profile images.

At most one generation runs per key: concurrent requests for a key that is
already being generated await the same task. Results are kept for a fixed
TTL, and the cache is trimmed oldest-first in bulk once it grows past its
ceiling.
"""
import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict

from whoiswho.core.cache import CacheEntry

logger = logging.getLogger(__name__)


class ImageCache:
    """Single-flight, size-bounded TTL cache for image bytes."""

    def __init__(
        self,
        ttl_seconds: float = 600,
        max_entries: int = 500,
        evict_batch: int = 20,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.evict_batch = evict_batch
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._pending: Dict[str, "asyncio.Task[bytes]"] = {}

    async def get_or_generate(self, key: str, generator: Callable[[], Awaitable[bytes]]) -> bytes:
        entry = self._entries.get(key)
        if entry is not None and self._clock() - entry.stored_at < self.ttl_seconds:
            logger.info(f"Image cache HIT for {key}")
            return entry.value

        pending = self._pending.get(key)
        if pending is not None:
            logger.info(f"Waiting for pending image generation for {key}")
            return await asyncio.shield(pending)

        logger.info(f"Image cache MISS for {key}, generating")
        task = asyncio.ensure_future(self._generate(key, generator))
        self._pending[key] = task
        return await asyncio.shield(task)

    async def _generate(self, key: str, generator: Callable[[], Awaitable[bytes]]) -> bytes:
        try:
            image = await generator()
            self._entries[key] = CacheEntry(value=image, stored_at=self._clock())
            logger.info(f"Cached image for {key} - Size: {len(image) / 1024:.1f} KB")
            self._evict()
            return image
        finally:
            self._pending.pop(key, None)

    def _evict(self) -> None:
        if len(self._entries) <= self.max_entries:
            return
        target = max(self.max_entries - self.evict_batch, 0)
        oldest_first = sorted(self._entries, key=lambda k: self._entries[k].stored_at)
        for key in oldest_first[: len(self._entries) - target]:
            self._entries.pop(key, None)
        logger.info(f"Cleaned up old image cache entries, current size: {len(self._entries)}")

    def is_pending(self, key: str) -> bool:
        """Whether a generation for `key` is in flight. Introspection only."""
        return key in self._pending

    def __len__(self) -> int:
        return len(self._entries)
