"""Mutual followers: users X such that A follows X and X follows B.

One-directional "common connection", not a symmetric intersection.
"""

import logging

from socialgraph.application.ports import GraphBackend
from socialgraph.domain import UserNode


class MutualService:
    def __init__(self, graph: GraphBackend, *, logger: logging.Logger | None = None) -> None:
        self._graph = graph
        self._logger = logger or logging.getLogger(__name__)

    def find_mutual_followers(self, from_id: str, to_id: str) -> list[UserNode] | None:
        """Return the common connections (possibly empty), or None if the query failed."""
        try:
            return self._graph.common_connection(from_id, to_id)
        except Exception as exc:
            self._logger.warning(
                "Failed to get mutual followers of %s and %s: %s", from_id, to_id, exc
            )
            return None

    def count_mutual_followers(self, from_id: str, to_id: str) -> int | None:
        mutual = self.find_mutual_followers(from_id, to_id)
        if mutual is None:
            return None
        return len(mutual)
