"""Cache store adapters."""

from socialgraph.infrastructure.cache.memory_cache import InMemoryCacheStore
from socialgraph.infrastructure.cache.redis_cache import RedisCacheStore

__all__ = ["InMemoryCacheStore", "RedisCacheStore"]
