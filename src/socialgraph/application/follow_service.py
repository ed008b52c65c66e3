"""Follow state machine: follow, unfollow, remove follower, and the paged lists."""

import logging
from http import HTTPStatus

from socialgraph.application.dto import Response, check_pagination
from socialgraph.application.enrichment import RelationshipEnricher
from socialgraph.application.ports import GraphBackend, NotificationPublisher
from socialgraph.application.relationship_queries import RelationshipQueries
from socialgraph.domain import Direction, RelationshipType

NEW_FOLLOW_EVENT = "create_notification"


class FollowService:
    """Transitions on the FOLLOWING edge of an ordered pair.

    Every operation returns a Response; backend errors become a 500 envelope.
    """

    def __init__(
        self,
        graph: GraphBackend,
        queries: RelationshipQueries,
        enricher: RelationshipEnricher,
        notifications: NotificationPublisher,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._graph = graph
        self._queries = queries
        self._enricher = enricher
        self._notifications = notifications
        self._logger = logger or logging.getLogger(__name__)

    def follow(self, from_id: str, to_id: str) -> Response:
        if from_id == to_id:
            return Response.fail(HTTPStatus.FORBIDDEN, "You cannot follow yourself")
        try:
            if self._graph.find_node(to_id) is None or self._graph.find_node(from_id) is None:
                return Response.fail(HTTPStatus.BAD_REQUEST, "User not found")
            if self._queries.is_following(from_id, to_id):
                return Response.fail(
                    HTTPStatus.FORBIDDEN, "You are already following this user"
                )
            if self._queries.is_blocked(from_id, to_id):
                return Response.fail(HTTPStatus.FORBIDDEN, "This user is limited to you")
            if not self._graph.create_edge(from_id, to_id, RelationshipType.FOLLOWING):
                return Response.internal_error("Failed to follow user")
            self._logger.info("User %s followed %s", from_id, to_id)
        except Exception as exc:
            self._logger.error("Failed to follow user %s -> %s: %s", from_id, to_id, exc)
            return Response.internal_error("Failed to follow user")

        self._notify_new_follow(from_id, to_id)
        return Response.ok("User followed successfully")

    def unfollow(self, from_id: str, to_id: str) -> Response:
        if from_id == to_id:
            return Response.fail(HTTPStatus.FORBIDDEN, "You cannot unfollow yourself")
        try:
            if not self._queries.is_following(from_id, to_id):
                return Response.fail(HTTPStatus.FORBIDDEN, "You are not following this user")
            if self._queries.is_blocked(from_id, to_id):
                return Response.fail(HTTPStatus.FORBIDDEN, "This user is limited to you")
            if not self._graph.delete_edge(from_id, to_id, RelationshipType.FOLLOWING):
                return Response.internal_error("Failed to unfollow user")
            self._logger.info("User %s unfollowed %s", from_id, to_id)
            return Response.ok("User unfollowed successfully")
        except Exception as exc:
            self._logger.error("Failed to unfollow user %s -> %s: %s", from_id, to_id, exc)
            return Response.internal_error("Failed to unfollow user")

    def remove_follower(self, user_id: str, follower_id: str) -> Response:
        """user_id deletes the follower_id -> user_id edge."""
        if user_id == follower_id:
            return Response.fail(HTTPStatus.FORBIDDEN, "You cannot remove yourself")
        try:
            if self._queries.is_blocked(user_id, follower_id):
                return Response.fail(HTTPStatus.FORBIDDEN, "User blocked")
            if not self._queries.is_following(follower_id, user_id):
                return Response.fail(HTTPStatus.FORBIDDEN, "User is not following you")
            if not self._graph.delete_edge(follower_id, user_id, RelationshipType.FOLLOWING):
                return Response.internal_error("Failed to remove follower")
            self._logger.info("User %s removed follower %s", user_id, follower_id)
            return Response.ok("Follower removed successfully")
        except Exception as exc:
            self._logger.error(
                "Failed to remove follower %s of %s: %s", follower_id, user_id, exc
            )
            return Response.internal_error("Failed to remove follower")

    def get_following(self, user_id: str, page: int, limit: int) -> Response:
        return self._list_neighbors(
            user_id, Direction.OUTGOING, page, limit, label="Following users"
        )

    def get_followers(self, user_id: str, page: int, limit: int) -> Response:
        return self._list_neighbors(
            user_id, Direction.INCOMING, page, limit, label="Followers"
        )

    def _list_neighbors(
        self, user_id: str, direction: Direction, page: int, limit: int, *, label: str
    ) -> Response:
        invalid = check_pagination(page, limit)
        if invalid:
            return invalid
        try:
            raw = self._graph.paged_neighbors(
                user_id, RelationshipType.FOLLOWING, direction, page, limit
            )
            users = self._enricher.enrich_many(raw, user_id)
            return Response.paginated(
                f"{label} fetched successfully",
                users,
                total=len(raw),
                page=page,
                limit=limit,
                is_last_page=len(raw) < limit,
            )
        except Exception as exc:
            self._logger.error("Failed to get %s of %s: %s", label.lower(), user_id, exc)
            return Response.internal_error(f"Failed to get {label.lower()}")

    def _notify_new_follow(self, from_id: str, to_id: str) -> None:
        try:
            follower = self._graph.find_node(from_id)
            username = (follower.username if follower else "") or from_id
            self._notifications.publish(
                NEW_FOLLOW_EVENT,
                {
                    "user_id": to_id,
                    "type": "new_follow",
                    "title": "You have a new follower",
                    "message": f"{username} just followed you",
                },
            )
        except Exception as exc:
            self._logger.warning(
                "Failed to emit new follow notification %s -> %s: %s", from_id, to_id, exc
            )
