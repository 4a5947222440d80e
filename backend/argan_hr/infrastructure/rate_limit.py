"""In-memory fixed-window rate limiter keyed by caller (client IP).

Invariants:
    - At most `limit` hits per key per window; the window restarts on the first hit after expiry
    - retry_after is whole seconds until the current window ends (>= 1 when rejected)
    - Expired windows are evicted at most once per window length, so tracked keys stay
      bounded by the callers seen in roughly the last two windows

Design Decisions:
    - Module-level state, single process: the external endpoint runs on one uvicorn worker
      (ADR: no Redis dependency for a low-volume integration endpoint)
    - Eviction piggybacks on hit(): no background task to start or cancel
    - Clock injectable for tests
"""

import math
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: int


class FixedWindowRateLimiter:
    def __init__(
        self, limit: int, window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_sweep = clock()

    def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()
        self._evict_expired(now)
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        if count >= self.limit:
            retry = max(1, math.ceil(started + self.window_seconds - now))
            return RateLimitDecision(False, 0, retry)
        count += 1
        self._windows[key] = (started, count)
        return RateLimitDecision(True, self.limit - count, 0)

    def tracked_keys(self) -> int:
        return len(self._windows)

    def reset(self) -> None:
        self._windows.clear()

    def _evict_expired(self, now: float) -> None:
        if now - self._last_sweep < self.window_seconds:
            return
        self._windows = {
            key: window for key, window in self._windows.items()
            if now - window[0] < self.window_seconds
        }
        self._last_sweep = now
