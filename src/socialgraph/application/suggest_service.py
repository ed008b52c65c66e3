"""Friend-of-friend suggestions: 2nd-degree first, then 3rd-degree.

The 3rd-degree tier starts at page ceil(second_degree_count / limit) and is
always queried at that page, whatever page was asked for. Later pages therefore
refetch the same 3rd-degree slice and rely on deduplication to come back empty.
"""

import logging
import math
from dataclasses import dataclass

from socialgraph.application.dto import Response, check_pagination
from socialgraph.application.enrichment import RelationshipEnricher
from socialgraph.application.ports import GraphBackend
from socialgraph.application.suggestion_cache import SuggestionDeduplicator
from socialgraph.domain import UserNode

SECOND_DEGREE = 2
THIRD_DEGREE = 3


@dataclass(frozen=True)
class CandidatePage:
    """Raw (pre-dedup, pre-enrichment) result of the tier that was queried."""

    users: list[UserNode]
    tier: int
    third_degree_start_page: int
    is_last_page: bool


class SuggestService:
    def __init__(
        self,
        graph: GraphBackend,
        dedup: SuggestionDeduplicator,
        enricher: RelationshipEnricher,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._graph = graph
        self._dedup = dedup
        self._enricher = enricher
        self._logger = logger or logging.getLogger(__name__)

    def fetch_candidates(self, viewer_id: str, page: int, limit: int) -> CandidatePage:
        """Pick the tier for page and query it. Backend errors propagate."""
        second_degree_count = self._graph.second_degree_count(viewer_id)
        third_degree_start_page = math.ceil(second_degree_count / limit)
        if page < third_degree_start_page:
            users = self._graph.second_degree(viewer_id, page, limit)
            tier = SECOND_DEGREE
        else:
            users = self._graph.third_degree(viewer_id, third_degree_start_page, limit)
            tier = THIRD_DEGREE
        return CandidatePage(
            users=users,
            tier=tier,
            third_degree_start_page=third_degree_start_page,
            is_last_page=len(users) < limit,
        )

    def get_suggestions(self, viewer_id: str, page: int, limit: int) -> Response:
        invalid = check_pagination(page, limit)
        if invalid:
            return invalid
        try:
            candidates = self.fetch_candidates(viewer_id, page, limit)
            self._logger.debug(
                "Suggestions for %s page %d: %d raw candidates from tier %d",
                viewer_id,
                page,
                len(candidates.users),
                candidates.tier,
            )
            unseen = self._dedup.filter_unseen(viewer_id, candidates.users)
            users = self._enricher.enrich_many(unseen, viewer_id)
            return Response.paginated(
                "Suggestions fetched successfully",
                users,
                total=len(candidates.users),
                page=page,
                limit=limit,
                is_last_page=candidates.is_last_page,
            )
        except Exception as exc:
            self._logger.error("Failed to get suggestions for user %s: %s", viewer_id, exc)
            return Response.internal_error("Failed to get suggestions")
