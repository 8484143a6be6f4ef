import pytest

from models.metric_types import MetricMode, MetricName
from models.search_result import SearchResult
from utils.cache import MetricCache, result_hash
from utils.rate_limiter import RateLimiterRegistry, SlidingWindowRateLimiter

pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _result(title="Title"):
    return SearchResult(title=title, description="desc", url="https://example.com")


def test_result_hash_is_stable_and_content_sensitive():
    assert result_hash(_result()) == result_hash(_result())
    assert result_hash(_result()) != result_hash(_result("Other"))


def test_cache_key_includes_metric_and_mode():
    r = _result()
    local = MetricCache.make_key(r, MetricName.VIBE, MetricMode.LOCAL)
    ai = MetricCache.make_key(r, MetricName.VIBE, MetricMode.AI)
    other = MetricCache.make_key(r, MetricName.CREDIBILITY, MetricMode.LOCAL)
    assert len({local, ai, other}) == 3


def test_cache_ttl_expiry():
    clock = FakeClock()
    cache = MetricCache(clock=clock)
    key = MetricCache.make_key(_result(), MetricName.VIBE, MetricMode.LOCAL)

    cache.set(key, "value", ttl_seconds=10)
    assert cache.get(key) == (True, "value")

    clock.now = 10
    assert cache.get(key) == (False, None)
    assert len(cache) == 0


def test_cache_stores_none_values():
    cache = MetricCache(clock=FakeClock())
    key = MetricCache.make_key(_result(), MetricName.SUSTAINABILITY, MetricMode.LOCAL)
    cache.set(key, None, ttl_seconds=5)
    assert cache.get(key) == (True, None)


def test_cache_purge_and_clear():
    clock = FakeClock()
    cache = MetricCache(clock=clock)
    r = _result()
    cache.set(MetricCache.make_key(r, MetricName.VIBE, MetricMode.LOCAL), 1, ttl_seconds=1)
    cache.set(MetricCache.make_key(r, MetricName.CREDIBILITY, MetricMode.LOCAL), 2, ttl_seconds=100)

    clock.now = 5
    assert cache.purge_expired() == 1
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0


def test_rate_limiter_sliding_window():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(2, window_seconds=60, clock=clock)

    assert limiter.try_acquire()
    clock.now = 30
    assert limiter.try_acquire()
    assert not limiter.try_acquire()
    assert limiter.remaining() == 0

    clock.now = 60
    assert limiter.remaining() == 1
    assert limiter.try_acquire()


def test_rate_limiter_zero_capacity():
    assert not SlidingWindowRateLimiter(0).try_acquire()


def test_registry_shares_limiter_per_provider():
    registry = RateLimiterRegistry(5)
    assert registry.for_provider("gemini") is registry.for_provider("gemini")
    assert registry.for_provider("gemini") is not registry.for_provider("openai")
    assert registry.for_provider("openai").max_requests == 5
