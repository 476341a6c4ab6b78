"""
Sliding-window rate limiter for snapshot minting.
"""
import logging
import time
from typing import Callable, List

from cachetools import TTLCache

logger = logging.getLogger(__name__)

MAX_TRACKED_KEYS = 100_000


class SlidingWindowRateLimiter:
    """Allow at most `max_actions` per key within a trailing window.

    The ledger maps each key to its ordered action timestamps. Every check
    prunes entries outside the window; a rejected check records nothing.
    A key expires from the ledger one window after it was last written, by
    which time every timestamp it held has left the window.
    """

    def __init__(self, max_actions: int, window_seconds: float, clock: Callable[[], float] = time.time,
                 max_keys: int = MAX_TRACKED_KEYS):
        self.max_actions = max_actions
        self.window_seconds = window_seconds
        self._clock = clock
        self._ledger = TTLCache(maxsize=max_keys, ttl=window_seconds, timer=clock)

    def _recent(self, key: int, now: float) -> List[float]:
        return [ts for ts in self._ledger.get(key, []) if now - ts < self.window_seconds]

    def check(self, key: int) -> bool:
        now = self._clock()
        recent = self._recent(key, now)

        if len(recent) >= self.max_actions:
            logger.warning(f"Rate limit reached for {key}: {len(recent)} actions in window")
            return False

        recent.append(now)
        self._ledger[key] = recent
        return True

    def attempts(self, key: int) -> int:
        """Number of recorded actions for `key` still inside the window.

        Introspection only; the mint flow uses `check`.
        """
        return len(self._recent(key, self._clock()))

    def __len__(self) -> int:
        """Keys currently tracked. Introspection only."""
        return len(self._ledger)
