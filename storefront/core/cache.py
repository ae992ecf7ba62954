"""Bounded in-process TTL cache."""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

from prometheus_client import Counter

V = TypeVar("V")

CACHE_HITS = Counter(
    "storefront_cache_hits_total",
    "Number of cache lookups answered from memory",
    labelnames=["cache"],
)

CACHE_MISSES = Counter(
    "storefront_cache_misses_total",
    "Number of cache lookups that had to be recomputed",
    labelnames=["cache"],
)


@dataclass
class CacheItem(Generic[V]):
    """Cached value with its creation time (monotonic seconds)."""

    value: V
    created_at: float


class TTLCache(Generic[V]):
    """Least-recently-used cache whose entries expire after a fixed TTL.

    Expired entries are treated as absent and evicted lazily on lookup.
    Once ``maxsize`` entries are held, storing a new key evicts the least
    recently used one. All operations take a lock so the cache can be shared
    between the event loop and worker threads.
    """

    def __init__(
        self,
        name: str,
        ttl: float,
        maxsize: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self.ttl = ttl
        self.maxsize = maxsize
        self._clock = clock
        self._items: OrderedDict[Hashable, CacheItem[V]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> V | None:
        """Return the live value for ``key`` or None."""
        with self._lock:
            item = self._items.get(key)
            if item is None:
                CACHE_MISSES.labels(cache=self.name).inc()
                return None
            if self._clock() - item.created_at > self.ttl:
                del self._items[key]
                CACHE_MISSES.labels(cache=self.name).inc()
                return None
            self._items.move_to_end(key)
            CACHE_HITS.labels(cache=self.name).inc()
            return item.value

    def set(self, key: Hashable, value: V) -> None:
        """Store ``value`` under ``key``, evicting the oldest entry if full."""
        with self._lock:
            self._items[key] = CacheItem(value=value, created_at=self._clock())
            self._items.move_to_end(key)
            while len(self._items) > self.maxsize:
                self._items.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None
