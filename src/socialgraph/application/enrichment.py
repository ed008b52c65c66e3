"""Relationship enrichment: annotate raw user nodes relative to a viewing user.

A candidate whose enrichment fails is dropped from the batch rather than
failing the whole page.
"""

import logging
from collections.abc import Iterable

from socialgraph.application.mutual_service import MutualService
from socialgraph.application.ports import GraphBackend
from socialgraph.domain import EnrichedUser, RelationshipType, UserNode


class RelationshipEnricher:
    def __init__(
        self,
        graph: GraphBackend,
        mutual: MutualService,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._graph = graph
        self._mutual = mutual
        self._logger = logger or logging.getLogger(__name__)

    def enrich(self, node: UserNode, viewer_id: str) -> EnrichedUser | None:
        """Return the annotated view of node for viewer_id, or None on any failure."""
        candidate_id = node.user_id
        try:
            is_following = self._graph.relationship_exists(
                viewer_id, candidate_id, RelationshipType.FOLLOWING
            )
            is_follower = self._graph.relationship_exists(
                candidate_id, viewer_id, RelationshipType.FOLLOWING
            )
            is_blocked = self._graph.relationship_exists(
                viewer_id, candidate_id, RelationshipType.BLOCKED
            )
            is_blocked_by = self._graph.relationship_exists(
                candidate_id, viewer_id, RelationshipType.BLOCKED
            )
        except Exception as exc:
            self._logger.warning(
                "Dropping %s: relationship check for viewer %s failed: %s",
                candidate_id,
                viewer_id,
                exc,
            )
            return None

        mutual_count = self._mutual.count_mutual_followers(viewer_id, candidate_id)
        if mutual_count is None:
            self._logger.warning(
                "Dropping %s: mutual followers unavailable for viewer %s",
                candidate_id,
                viewer_id,
            )
            return None

        return EnrichedUser(
            user=node,
            is_following=is_following,
            is_follower=is_follower,
            is_blocked=is_blocked,
            is_blocked_by=is_blocked_by,
            mutual_followers_number=mutual_count,
        )

    def enrich_for_follow_filtering(
        self, node: UserNode, viewer_id: str
    ) -> EnrichedUser | None:
        """Like enrich, but None when the viewer already follows the candidate."""
        enriched = self.enrich(node, viewer_id)
        if enriched is None or enriched.is_following:
            return None
        return enriched

    def enrich_many(self, nodes: Iterable[UserNode], viewer_id: str) -> list[EnrichedUser]:
        return self._enrich_all(nodes, viewer_id, self.enrich)

    def enrich_many_for_follow_filtering(
        self, nodes: Iterable[UserNode], viewer_id: str
    ) -> list[EnrichedUser]:
        return self._enrich_all(nodes, viewer_id, self.enrich_for_follow_filtering)

    def _enrich_all(self, nodes, viewer_id, enrich_one) -> list[EnrichedUser]:
        out = []
        for node in nodes:
            try:
                enriched = enrich_one(node, viewer_id)
            except Exception as exc:
                self._logger.warning("Failed to enrich %s: %s", node.user_id, exc)
                continue
            if enriched is not None:
                out.append(enriched)
        return out
