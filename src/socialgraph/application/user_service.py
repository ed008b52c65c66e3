"""User node sync: keeps the graph's User nodes in step with the user service."""

import logging
from http import HTTPStatus

from socialgraph.application.dto import Response
from socialgraph.application.ports import GraphBackend
from socialgraph.domain import UserNode


class UserService:
    def __init__(self, graph: GraphBackend, *, logger: logging.Logger | None = None) -> None:
        self._graph = graph
        self._logger = logger or logging.getLogger(__name__)

    def create_user(self, user: UserNode) -> Response:
        try:
            stored = self._graph.upsert_user_node(user)
            self._logger.info("User node %s created", stored.user_id)
            return Response.ok("User node created successfully", stored)
        except Exception as exc:
            self._logger.error("Failed to create user %s: %s", user.user_id, exc)
            return Response.internal_error("Failed to create user")

    def update_user(self, user: UserNode) -> Response:
        try:
            if not self._graph.update_user_node(user):
                return Response.fail(HTTPStatus.NOT_FOUND, "User not found")
            stored = self._graph.find_node(user.user_id)
            return Response.ok("User node updated successfully", stored)
        except Exception as exc:
            self._logger.error("Failed to update user %s: %s", user.user_id, exc)
            return Response.internal_error("Failed to update user")

    def get_user(self, user_id: str) -> Response:
        try:
            node = self._graph.find_node(user_id)
        except Exception as exc:
            self._logger.error("Failed to get user %s: %s", user_id, exc)
            return Response.internal_error("Failed to get user")
        if node is None:
            return Response.fail(HTTPStatus.NOT_FOUND, "User not found")
        return Response.ok("User fetched successfully", node)

    def user_exists(self, user_id: str) -> bool:
        try:
            return self._graph.find_node(user_id) is not None
        except Exception as exc:
            self._logger.warning("Failed to check user %s: %s", user_id, exc)
            return False
