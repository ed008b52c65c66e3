"""Block state machine. Blocking detaches any FOLLOWING edge in both directions first."""

import logging
from http import HTTPStatus

from socialgraph.application.dto import Response, check_pagination
from socialgraph.application.enrichment import RelationshipEnricher
from socialgraph.application.follow_service import FollowService
from socialgraph.application.ports import GraphBackend
from socialgraph.application.relationship_queries import RelationshipQueries
from socialgraph.domain import Direction, RelationshipType


class BlockService:
    def __init__(
        self,
        graph: GraphBackend,
        queries: RelationshipQueries,
        follows: FollowService,
        enricher: RelationshipEnricher,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._graph = graph
        self._queries = queries
        self._follows = follows
        self._enricher = enricher
        self._logger = logger or logging.getLogger(__name__)

    def block(self, from_id: str, to_id: str) -> Response:
        """Unfollow, remove follower, then create from -> to BLOCKED.

        Only the final edge creation decides the result.
        """
        if from_id == to_id:
            return Response.fail(HTTPStatus.FORBIDDEN, "You cannot block yourself")
        try:
            if self._graph.find_node(to_id) is None or self._graph.find_node(from_id) is None:
                return Response.fail(HTTPStatus.BAD_REQUEST, "User not found")
            if self._queries.is_blocked(from_id, to_id):
                return Response.fail(HTTPStatus.FORBIDDEN, "User already blocked")
            self._detach(
                "unfollow",
                lambda: self._queries.is_following(from_id, to_id),
                lambda: self._follows.unfollow(from_id, to_id),
                from_id,
                to_id,
            )
            self._detach(
                "remove follower",
                lambda: self._queries.is_following(to_id, from_id),
                lambda: self._follows.remove_follower(from_id, to_id),
                from_id,
                to_id,
            )
            if not self._graph.create_edge(from_id, to_id, RelationshipType.BLOCKED):
                return Response.internal_error("Failed to block user")
            self._logger.info("User %s blocked %s", from_id, to_id)
            return Response.ok("User blocked successfully")
        except Exception as exc:
            self._logger.error("Failed to block user %s -> %s: %s", from_id, to_id, exc)
            return Response.internal_error("Failed to block user")

    def unblock(self, from_id: str, to_id: str) -> Response:
        """Remove the stored BLOCKED edge between the pair, whichever direction it has."""
        if from_id == to_id:
            return Response.fail(HTTPStatus.FORBIDDEN, "You cannot unblock yourself")
        try:
            stored = self._queries.blocked_direction(from_id, to_id)
            if stored is None:
                return Response.fail(HTTPStatus.FORBIDDEN, "User not blocked")
            blocker, blocked = stored
            if not self._graph.delete_edge(blocker, blocked, RelationshipType.BLOCKED):
                return Response.internal_error("Failed to unblock user")
            self._logger.info("BLOCKED edge %s -> %s removed by %s", blocker, blocked, from_id)
            return Response.ok("User unblocked successfully")
        except Exception as exc:
            self._logger.error("Failed to unblock user %s -> %s: %s", from_id, to_id, exc)
            return Response.internal_error("Failed to unblock user")

    def get_blocked(self, user_id: str, page: int, limit: int) -> Response:
        invalid = check_pagination(page, limit)
        if invalid:
            return invalid
        try:
            raw = self._graph.paged_neighbors(
                user_id, RelationshipType.BLOCKED, Direction.OUTGOING, page, limit
            )
            users = self._enricher.enrich_many(raw, user_id)
            return Response.paginated(
                "Blocked users fetched successfully",
                users,
                total=len(raw),
                page=page,
                limit=limit,
                is_last_page=len(raw) < limit,
            )
        except Exception as exc:
            self._logger.error("Failed to get blocked users of %s: %s", user_id, exc)
            return Response.internal_error("Failed to get blocked users")

    def _detach(self, step, applies, run, from_id, to_id) -> None:
        try:
            if not applies():
                return
            result = run()
        except Exception as exc:
            self._logger.warning(
                "Block %s -> %s: %s step failed: %s", from_id, to_id, step, exc
            )
            return
        if not result.success:
            self._logger.warning(
                "Block %s -> %s: %s step returned %s (%s)",
                from_id,
                to_id,
                step,
                result.status_code,
                result.message,
            )
