"""Tests for the TTL cache."""

from storefront.core.cache import CACHE_HITS, CACHE_MISSES, TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_get_returns_value_within_ttl() -> None:
    clock = FakeClock()
    cache: TTLCache[str] = TTLCache("test", ttl=10, maxsize=4, clock=clock)
    cache.set("a", "alpha")
    clock.advance(10)
    assert cache.get("a") == "alpha"


def test_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    cache: TTLCache[str] = TTLCache("test", ttl=10, maxsize=4, clock=clock)
    cache.set("a", "alpha")
    clock.advance(10.5)
    assert cache.get("a") is None
    assert len(cache) == 0


def test_least_recently_used_entry_is_evicted() -> None:
    cache: TTLCache[int] = TTLCache("test", ttl=60, maxsize=2, clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.get("a") == 1
    cache.set("c", 3)

    assert "b" not in cache
    assert cache.get("a") == 1
    assert cache.get("c") == 3
    assert len(cache) == 2


def test_set_overwrites_and_refreshes_entry() -> None:
    clock = FakeClock()
    cache: TTLCache[int] = TTLCache("test", ttl=10, maxsize=2, clock=clock)
    cache.set("a", 1)
    clock.advance(8)
    cache.set("a", 2)
    clock.advance(8)
    assert cache.get("a") == 2


def test_clear() -> None:
    cache: TTLCache[int] = TTLCache("test", ttl=10, maxsize=2)
    cache.set("a", 1)
    cache.clear()
    assert cache.get("a") is None


def test_hits_and_misses_are_counted() -> None:
    cache: TTLCache[int] = TTLCache("counted", ttl=10, maxsize=2, clock=FakeClock())
    hits = CACHE_HITS.labels(cache="counted")._value.get()
    misses = CACHE_MISSES.labels(cache="counted")._value.get()

    cache.get("a")
    cache.set("a", 1)
    cache.get("a")

    assert CACHE_HITS.labels(cache="counted")._value.get() == hits + 1
    assert CACHE_MISSES.labels(cache="counted")._value.get() == misses + 1
