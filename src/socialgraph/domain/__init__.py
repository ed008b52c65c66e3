"""Domain layer: entities and value objects. No dependencies on outer layers."""

from socialgraph.domain.entities import (
    INTEREST_SUGGESTION_CACHE_PREFIX,
    INTEREST_SUGGESTION_CACHE_TTL,
    SUGGESTION_CACHE_PREFIX,
    SUGGESTION_CACHE_TTL,
    Direction,
    EnrichedUser,
    Interest,
    RelationshipType,
    UserNode,
)

__all__ = [
    "Direction",
    "EnrichedUser",
    "INTEREST_SUGGESTION_CACHE_PREFIX",
    "INTEREST_SUGGESTION_CACHE_TTL",
    "Interest",
    "RelationshipType",
    "SUGGESTION_CACHE_PREFIX",
    "SUGGESTION_CACHE_TTL",
    "UserNode",
]
