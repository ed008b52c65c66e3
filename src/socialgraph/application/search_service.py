"""Mutual-follower lookup and substring search over a user's own follow lists."""

import logging
from http import HTTPStatus

from socialgraph.application.dto import Response, check_pagination
from socialgraph.application.enrichment import RelationshipEnricher
from socialgraph.application.mutual_service import MutualService
from socialgraph.application.ports import GraphBackend
from socialgraph.domain import Direction


class SearchService:
    """Empty results are 404 envelopes; backend failures are 500 envelopes."""

    def __init__(
        self,
        graph: GraphBackend,
        mutual: MutualService,
        enricher: RelationshipEnricher,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._graph = graph
        self._mutual = mutual
        self._enricher = enricher
        self._logger = logger or logging.getLogger(__name__)

    def mutual_followers(self, from_id: str, to_id: str) -> Response:
        try:
            mutual = self._mutual.find_mutual_followers(from_id, to_id)
            if mutual is None:
                return Response.internal_error("Failed to get mutual followers")
            if not mutual:
                self._logger.debug("No mutual followers for %s -> %s", from_id, to_id)
                return Response.fail(HTTPStatus.NOT_FOUND, "No mutual followers found")
            users = self._enricher.enrich_many(mutual, from_id)
            return Response.ok("Mutual followers fetched successfully", users)
        except Exception as exc:
            self._logger.error(
                "Failed to get mutual followers of %s and %s: %s", from_id, to_id, exc
            )
            return Response.internal_error("Failed to get mutual followers")

    def search_followers(self, user_id: str, query: str, page: int, limit: int) -> Response:
        return self._search(user_id, Direction.INCOMING, query, page, limit, label="followers")

    def search_following(self, user_id: str, query: str, page: int, limit: int) -> Response:
        return self._search(user_id, Direction.OUTGOING, query, page, limit, label="following")

    def _search(
        self,
        user_id: str,
        direction: Direction,
        query: str,
        page: int,
        limit: int,
        *,
        label: str,
    ) -> Response:
        invalid = check_pagination(page, limit)
        if invalid:
            return invalid
        needle = (query or "").strip()
        if not needle:
            return Response.fail(HTTPStatus.BAD_REQUEST, "Search query is required")
        try:
            raw = self._graph.substring_search(user_id, direction, needle, page, limit)
            if not raw:
                self._logger.debug("No %s of %s match %r", label, user_id, needle)
                return Response.fail(
                    HTTPStatus.NOT_FOUND, f"No {label} found for query: {needle}"
                )
            users = self._enricher.enrich_many(raw, user_id)
            return Response.paginated(
                f"{label.capitalize()} fetched successfully",
                users,
                total=len(raw),
                page=page,
                limit=limit,
                is_last_page=len(raw) < limit,
            )
        except Exception as exc:
            self._logger.error("Failed to search %s of %s: %s", label, user_id, exc)
            return Response.internal_error(f"Failed to search {label}")
