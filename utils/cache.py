"""Thread-safe TTL cache for per-result metric values."""

import hashlib
import threading
import time
from collections.abc import Callable
from typing import Any

from models.metric_types import MetricMode, MetricName
from models.search_result import SearchResult


def result_hash(result: SearchResult) -> str:
    """Stable sha256 over the fields that feed the analyzers."""
    payload = "\x1f".join((result.title, result.description, result.url))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class MetricCache:
    """
    In-memory cache keyed on ``(result hash, metric, mode)``.

    Every entry carries its own TTL since metrics expire at different rates.
    A lock guards all access; two concurrent misses on the same key only
    duplicate work, the last write wins.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._cache: dict[tuple[str, str, str], tuple[Any, float]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    @staticmethod
    def make_key(
        result: SearchResult, metric: MetricName, mode: MetricMode
    ) -> tuple[str, str, str]:
        return result_hash(result), metric.value, mode.value

    def get(self, key: tuple[str, str, str]) -> tuple[bool, Any]:
        """
        Look up ``key``.

        Returns:
            (hit, value). ``value`` may legitimately be None (an absent
            sustainability score), so the hit flag is returned separately.
        """
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return False, None
            value, expires_at = entry
            if self._clock() < expires_at:
                return True, value
            del self._cache[key]
            return False, None

    def set(self, key: tuple[str, str, str], value: Any, ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._cache[key] = (value, self._clock() + ttl_seconds)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [k for k, (_, expires_at) in self._cache.items() if expires_at <= now]
            for k in expired:
                del self._cache[k]
            return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
