"""
Socialgraph core: relationship state, enrichment, and suggestions over a graph store.

- domain: entities (UserNode, EnrichedUser) and the relationship vocabulary.
- application: use cases (follow/block state machines, search, suggestions), ports, envelopes.
- infrastructure: adapters (Neo4j, in-memory graph; Redis, in-memory cache; notifications).
"""

from socialgraph.application import (
    BlockService,
    CacheStore,
    FollowService,
    GraphBackend,
    InterestService,
    NotificationPublisher,
    RelationshipEnricher,
    Response,
    SearchService,
    SuggestService,
    UserService,
)
from socialgraph.domain import Direction, EnrichedUser, Interest, RelationshipType, UserNode
from socialgraph.infrastructure import (
    InMemoryCacheStore,
    InMemoryGraphBackend,
    InMemoryNotificationPublisher,
    Neo4jGraphBackend,
    RedisCacheStore,
    RedisNotificationPublisher,
)
from socialgraph.wiring import RelationshipServices, build_services

__all__ = [
    "BlockService",
    "CacheStore",
    "Direction",
    "EnrichedUser",
    "FollowService",
    "GraphBackend",
    "InMemoryCacheStore",
    "InMemoryGraphBackend",
    "InMemoryNotificationPublisher",
    "Interest",
    "InterestService",
    "Neo4jGraphBackend",
    "NotificationPublisher",
    "RedisCacheStore",
    "RedisNotificationPublisher",
    "RelationshipEnricher",
    "RelationshipServices",
    "RelationshipType",
    "Response",
    "SearchService",
    "SuggestService",
    "UserNode",
    "build_services",
]
