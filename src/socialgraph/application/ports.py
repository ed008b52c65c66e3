"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Any, Protocol

from socialgraph.domain import Direction, RelationshipType, UserNode


class GraphBackend(Protocol):
    """Stores User nodes and directed FOLLOWING / BLOCKED edges.

    Implementations raise on backend failure; they never return partial data.
    Pages are 0-based: skip = page * limit.
    """

    def find_node(self, user_id: str) -> UserNode | None:
        """Return the User node with the given id, or None."""
        ...

    def relationship_exists(
        self, from_id: str, to_id: str, rel_type: RelationshipType
    ) -> bool:
        ...

    def create_edge(self, from_id: str, to_id: str, rel_type: RelationshipType) -> bool:
        """Create from -> to. FOLLOWING also bumps both counters in the same statement.
        Returns False when either node is missing or the edge already exists."""
        ...

    def delete_edge(self, from_id: str, to_id: str, rel_type: RelationshipType) -> bool:
        """Delete from -> to (and decrement counters for FOLLOWING). False if absent."""
        ...

    def paged_neighbors(
        self,
        user_id: str,
        rel_type: RelationshipType,
        direction: Direction,
        page: int,
        limit: int,
    ) -> list[UserNode]:
        ...

    def second_degree(self, user_id: str, page: int, limit: int) -> list[UserNode]:
        """Distinct B for user -> A -> B, B not followed by user and B != user."""
        ...

    def third_degree(self, user_id: str, page: int, limit: int) -> list[UserNode]:
        """Distinct C for user -> A -> B -> C, C not followed, C != user, C != B."""
        ...

    def second_degree_count(self, user_id: str) -> int:
        ...

    def common_connection(self, from_id: str, to_id: str) -> list[UserNode]:
        """Distinct X with from -> X and X -> to (FOLLOWING)."""
        ...

    def substring_search(
        self, user_id: str, direction: Direction, query: str, page: int, limit: int
    ) -> list[UserNode]:
        """Case-insensitive match on username or display_name among the user's
        following (OUTGOING) or followers (INCOMING)."""
        ...

    def shared_interest_users(self, user_id: str, page: int, limit: int) -> list[UserNode]:
        ...

    def upsert_user_node(self, user: UserNode) -> UserNode:
        """Create the node if missing (counters 0) and set profile fields."""
        ...

    def update_user_node(self, user: UserNode) -> bool:
        """Set profile fields of an existing node. Counters are left untouched."""
        ...

    def set_user_interests(self, user_id: str, interests: list[str]) -> bool:
        """Replace the user's interest tags. False when the user is missing."""
        ...

    def list_user_interests(self, user_id: str) -> list[str]:
        ...


class CacheStore(Protocol):
    """Key/value store with TTL. Values are JSON-compatible."""

    def get(self, key: str) -> Any | None:
        ...

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class NotificationPublisher(Protocol):
    """Fire-and-forget event emission to the notification service."""

    def publish(self, event: str, payload: dict) -> None:
        ...
