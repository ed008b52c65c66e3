"""Infrastructure layer: concrete implementations of application ports."""

from socialgraph.infrastructure.cache import InMemoryCacheStore, RedisCacheStore
from socialgraph.infrastructure.memory_graph import InMemoryGraphBackend
from socialgraph.infrastructure.notifications import (
    InMemoryNotificationPublisher,
    RedisNotificationPublisher,
)
from socialgraph.infrastructure.persistence.neo4j_graph import Neo4jGraphBackend

__all__ = [
    "InMemoryCacheStore",
    "InMemoryGraphBackend",
    "InMemoryNotificationPublisher",
    "Neo4jGraphBackend",
    "RedisCacheStore",
    "RedisNotificationPublisher",
]
