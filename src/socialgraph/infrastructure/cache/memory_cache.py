"""In-memory implementation of CacheStore with TTL expiry."""

import copy
import time
from collections.abc import Callable


class InMemoryCacheStore:
    """Expired entries are dropped lazily on read. Values are deep-copied in and out."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[object, float]] = {}

    def get(self, key: str):
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return copy.deepcopy(value)

    def set(self, key: str, value, ttl_seconds: int) -> None:
        self._entries[key] = (copy.deepcopy(value), self._clock() + ttl_seconds)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)
