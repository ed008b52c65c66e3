"""Read-only relationship checks shared by the follow and block state machines."""

import logging

from socialgraph.application.ports import GraphBackend
from socialgraph.domain import RelationshipType


class RelationshipQueries:
    """Edge-existence primitives. Backend errors propagate to the caller."""

    def __init__(self, graph: GraphBackend, *, logger: logging.Logger | None = None) -> None:
        self._graph = graph
        self._logger = logger or logging.getLogger(__name__)

    def is_following(self, from_id: str, to_id: str) -> bool:
        return self._graph.relationship_exists(from_id, to_id, RelationshipType.FOLLOWING)

    def is_blocked(self, user_a: str, user_b: str) -> bool:
        """True when either user has blocked the other."""
        return self.blocked_direction(user_a, user_b) is not None

    def blocked_direction(self, user_a: str, user_b: str) -> tuple[str, str] | None:
        """Return the (blocker, blocked) pair actually stored, checking a -> b first."""
        if self._graph.relationship_exists(user_a, user_b, RelationshipType.BLOCKED):
            return user_a, user_b
        if self._graph.relationship_exists(user_b, user_a, RelationshipType.BLOCKED):
            return user_b, user_a
        self._logger.debug("No BLOCKED edge between %s and %s", user_a, user_b)
        return None
