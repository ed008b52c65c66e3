"""Cross-page suggestion deduplication backed by the cache store.

The cached value for "<prefix>:<viewer_id>" is a JSON list of user ids already
surfaced to that viewer. The set only grows; entries leave by TTL expiry. The
read-modify-write is not atomic, so concurrent pages for the same viewer can
occasionally let a duplicate through.
"""

import logging
from collections.abc import Sequence

from socialgraph.application.ports import CacheStore
from socialgraph.domain import UserNode


class SuggestionDeduplicator:
    """Cache failures are logged and treated as an empty set / skipped write."""

    def __init__(
        self,
        cache: CacheStore,
        *,
        prefix: str,
        ttl_seconds: int,
        logger: logging.Logger | None = None,
    ) -> None:
        self._cache = cache
        self._prefix = prefix
        self._ttl = ttl_seconds
        self._logger = logger or logging.getLogger(__name__)

    def cache_key(self, viewer_id: str) -> str:
        return f"{self._prefix}:{viewer_id}"

    def seen_ids(self, viewer_id: str) -> set[str]:
        key = self.cache_key(viewer_id)
        try:
            cached = self._cache.get(key)
        except Exception as exc:
            self._logger.warning("Failed to read suggestion cache %s: %s", key, exc)
            return set()
        if not isinstance(cached, list):
            return set()
        return {str(user_id) for user_id in cached}

    def filter_unseen(self, viewer_id: str, candidates: Sequence[UserNode]) -> list[UserNode]:
        """Drop candidates already surfaced to viewer_id and record the survivors."""
        seen = self.seen_ids(viewer_id)
        survivors = [c for c in candidates if c.user_id not in seen]
        if survivors:
            self._remember(viewer_id, seen, [c.user_id for c in survivors])
        return survivors

    def _remember(self, viewer_id: str, seen: set[str], new_ids: list[str]) -> None:
        key = self.cache_key(viewer_id)
        merged = sorted(seen.union(new_ids))
        try:
            self._cache.set(key, merged, self._ttl)
        except Exception as exc:
            self._logger.warning("Failed to update suggestion cache %s: %s", key, exc)
            return
        self._logger.info(
            "Updated suggestion cache %s with %d new suggestions", key, len(new_ids)
        )
