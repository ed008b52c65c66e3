"""Interest tags and interest-based suggestions."""

import logging
from http import HTTPStatus

from socialgraph.application.dto import Response, check_pagination
from socialgraph.application.enrichment import RelationshipEnricher
from socialgraph.application.ports import GraphBackend
from socialgraph.application.suggestion_cache import SuggestionDeduplicator
from socialgraph.domain import Interest


def _parse_interests(values) -> list[str] | None:
    """Return normalised tag values, or None if any tag is unknown."""
    out = []
    for value in values or []:
        try:
            tag = Interest(str(value).strip().lower()).value
        except ValueError:
            return None
        if tag not in out:
            out.append(tag)
    return out


class InterestService:
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

    def set_user_interests(self, user_id: str, interests: list[str]) -> Response:
        """Replace the user's interest tags."""
        tags = _parse_interests(interests)
        if tags is None:
            return Response.fail(HTTPStatus.BAD_REQUEST, "Unknown interest")
        try:
            if not self._graph.set_user_interests(user_id, tags):
                return Response.fail(HTTPStatus.NOT_FOUND, "User not found")
            self._logger.info("Set %d interests for user %s", len(tags), user_id)
            return Response.ok("User interests created successfully", tags)
        except Exception as exc:
            self._logger.error("Failed to set interests for user %s: %s", user_id, exc)
            return Response.internal_error("Failed to create user interests")

    def get_user_interests(self, user_id: str) -> Response:
        try:
            tags = self._graph.list_user_interests(user_id)
        except Exception as exc:
            self._logger.error("Failed to get interests for user %s: %s", user_id, exc)
            return Response.internal_error("Failed to get user interests")
        if not tags:
            return Response.fail(HTTPStatus.NOT_FOUND, "User interests not found", data=[])
        return Response.ok("User interests fetched successfully", sorted(tags))

    def get_interest_suggestions(self, viewer_id: str, page: int, limit: int) -> Response:
        """Users sharing at least one interest with viewer_id and not already followed,
        deduplicated across pages."""
        invalid = check_pagination(page, limit)
        if invalid:
            return invalid
        try:
            raw = self._graph.shared_interest_users(viewer_id, page, limit)
            unseen = self._dedup.filter_unseen(viewer_id, raw)
            users = self._enricher.enrich_many_for_follow_filtering(unseen, viewer_id)
            return Response.paginated(
                "Interest-based suggestions fetched successfully",
                users,
                total=len(raw),
                page=page,
                limit=limit,
                is_last_page=len(raw) < limit,
            )
        except Exception as exc:
            self._logger.error(
                "Failed to get interest-based suggestions for user %s: %s", viewer_id, exc
            )
            return Response.internal_error("Failed to get interest-based suggestions")
