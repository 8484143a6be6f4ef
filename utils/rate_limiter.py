"""Per-provider request throttling for AI-backed metrics."""

import threading
import time
from collections import deque
from collections.abc import Callable


class SlidingWindowRateLimiter:
    """
    Allows at most ``max_requests`` acquisitions in any ``window_seconds``
    span. ``try_acquire`` never blocks: a denied call is the caller's cue to
    degrade to its local fallback.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._timestamps: deque[float] = deque()
        self._lock = threading.Lock()

    def _evict(self, now: float) -> None:
        while self._timestamps and now - self._timestamps[0] >= self.window_seconds:
            self._timestamps.popleft()

    def try_acquire(self) -> bool:
        if self.max_requests <= 0:
            return False
        with self._lock:
            now = self._clock()
            self._evict(now)
            if len(self._timestamps) >= self.max_requests:
                return False
            self._timestamps.append(now)
            return True

    def remaining(self) -> int:
        with self._lock:
            self._evict(self._clock())
            return max(0, self.max_requests - len(self._timestamps))


class RateLimiterRegistry:
    """
    One sliding-window limiter per provider, shared across analysis runs.

    Concurrency caps are per run (an ``asyncio.Semaphore`` belongs to one
    event loop) and are created by the caller.
    """

    def __init__(self, rate_limit_per_minute: int):
        self.rate_limit_per_minute = rate_limit_per_minute
        self._limiters: dict[str, SlidingWindowRateLimiter] = {}
        self._lock = threading.Lock()

    def for_provider(self, provider: str) -> SlidingWindowRateLimiter:
        with self._lock:
            limiter = self._limiters.get(provider)
            if limiter is None:
                limiter = SlidingWindowRateLimiter(self.rate_limit_per_minute, window_seconds=60.0)
                self._limiters[provider] = limiter
            return limiter
