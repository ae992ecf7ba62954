"""Key/value storage backends for client-side state (cart, consent)."""

from typing import Optional, Protocol

import redis

from storefront.core.config import settings


class Storage(Protocol):
    """The subset of the browser ``localStorage`` API the stores rely on."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage, mainly for tests and single-process use."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class RedisStorage:
    """Redis-backed storage namespaced per visitor session."""

    def __init__(
        self,
        redis_client: redis.Redis,
        session_id: str,
        prefix: str = "storefront",
        ttl: int | None = 60 * 60 * 24 * 30,
    ) -> None:
        """Initialize storage for one session.

        Args:
            redis_client: Redis client for state storage
            session_id: Visitor session (or cart) identifier
            prefix: Key namespace
            ttl: Seconds a value is kept after its last write; None keeps it
        """
        self.redis = redis_client
        self.namespace = f"{prefix}:{session_id}"
        self.ttl = ttl

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get_item(self, key: str) -> Optional[str]:
        value = self.redis.get(self._key(key))
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set_item(self, key: str, value: str) -> None:
        if self.ttl:
            self.redis.setex(self._key(key), self.ttl, value)
        else:
            self.redis.set(self._key(key), value)

    def remove_item(self, key: str) -> None:
        self.redis.delete(self._key(key))


def storage_for_session(session_id: str, redis_url: str | None = None) -> Storage:
    """Redis storage when a Redis URL is configured, otherwise in-memory."""
    url = settings.REDIS_URL if redis_url is None else redis_url
    if url:
        return RedisStorage(redis.Redis.from_url(url), session_id)
    return MemoryStorage()
