"""Unit tests for FollowService. In-memory graph only."""

from http import HTTPStatus

from conftest import add_block, add_follow, add_user

from socialgraph import build_services
from socialgraph.application.follow_service import NEW_FOLLOW_EVENT
from socialgraph.domain import RelationshipType


class ExplodingGraph:
    """Any backend call fails the test."""

    def __getattr__(self, name):
        raise AssertionError(f"backend touched: {name}")


class FailingPublisher:
    def publish(self, event, payload):
        raise ConnectionError("pubsub down")


def test_follow_self_is_rejected_without_backend_calls(cache, notifications) -> None:
    services = build_services(ExplodingGraph(), cache, notifications)

    result = services.follows.follow("alice", "alice")

    assert result.success is False
    assert result.status_code == HTTPStatus.FORBIDDEN
    assert result.message == "You cannot follow yourself"
    assert notifications.events == []


def test_follow_creates_edge_and_updates_counters(services, graph) -> None:
    add_user(graph, "alice")
    add_user(graph, "bob")

    result = services.follows.follow("alice", "bob")

    assert result.success is True
    assert result.status_code == HTTPStatus.OK
    assert graph.relationship_exists("alice", "bob", RelationshipType.FOLLOWING)
    assert graph.find_node("alice").following_number == 1
    assert graph.find_node("bob").followers_number == 1
    assert graph.find_node("bob").following_number == 0


def test_follow_emits_new_follow_notification(services, graph, notifications) -> None:
    add_user(graph, "alice", username="alice_w")
    add_user(graph, "bob")

    services.follows.follow("alice", "bob")

    assert notifications.events == [
        (
            NEW_FOLLOW_EVENT,
            {
                "user_id": "bob",
                "type": "new_follow",
                "title": "You have a new follower",
                "message": "alice_w just followed you",
            },
        )
    ]


def test_follow_succeeds_when_publisher_fails(graph, cache) -> None:
    add_user(graph, "alice")
    add_user(graph, "bob")
    services = build_services(graph, cache, FailingPublisher())

    result = services.follows.follow("alice", "bob")

    assert result.success is True
    assert graph.relationship_exists("alice", "bob", RelationshipType.FOLLOWING)


def test_follow_twice_is_rejected(services, graph, notifications) -> None:
    add_user(graph, "alice")
    add_user(graph, "bob")
    services.follows.follow("alice", "bob")

    result = services.follows.follow("alice", "bob")

    assert result.success is False
    assert result.status_code == HTTPStatus.FORBIDDEN
    assert result.message == "You are already following this user"
    assert graph.find_node("bob").followers_number == 1
    assert len(notifications.events) == 1


def test_follow_blocked_pair_is_rejected_in_either_direction(services, graph) -> None:
    for uid in ("alice", "bob", "carol"):
        add_user(graph, uid)
    add_block(graph, "bob", "alice")
    add_block(graph, "alice", "carol")

    by_target = services.follows.follow("alice", "bob")
    by_viewer = services.follows.follow("alice", "carol")

    assert by_target.message == "This user is limited to you"
    assert by_viewer.message == "This user is limited to you"
    assert not graph.relationship_exists("alice", "bob", RelationshipType.FOLLOWING)
    assert not graph.relationship_exists("alice", "carol", RelationshipType.FOLLOWING)


def test_follow_unknown_user_is_rejected(services, graph) -> None:
    add_user(graph, "alice")

    result = services.follows.follow("alice", "ghost")

    assert result.status_code == HTTPStatus.BAD_REQUEST
    assert result.message == "User not found"


def test_follow_backend_failure_is_500(services, graph, monkeypatch) -> None:
    add_user(graph, "alice")
    add_user(graph, "bob")

    def broken(*args):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(graph, "create_edge", broken)

    result = services.follows.follow("alice", "bob")

    assert result.success is False
    assert result.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert result.message == "Failed to follow user"
    assert "connection reset" not in result.to_dict().values()


def test_unfollow_removes_edge_and_counters(services, graph) -> None:
    add_user(graph, "alice")
    add_user(graph, "bob")
    add_follow(graph, "alice", "bob")

    result = services.follows.unfollow("alice", "bob")

    assert result.success is True
    assert not graph.relationship_exists("alice", "bob", RelationshipType.FOLLOWING)
    assert graph.find_node("alice").following_number == 0
    assert graph.find_node("bob").followers_number == 0


def test_unfollow_when_not_following_is_rejected(services, graph) -> None:
    add_user(graph, "alice")
    add_user(graph, "bob")

    result = services.follows.unfollow("alice", "bob")

    assert result.status_code == HTTPStatus.FORBIDDEN
    assert result.message == "You are not following this user"


def test_unfollow_self_is_rejected(services) -> None:
    assert services.follows.unfollow("alice", "alice").message == "You cannot unfollow yourself"


def test_remove_follower_deletes_reverse_edge(services, graph) -> None:
    add_user(graph, "alice")
    add_user(graph, "bob")
    add_follow(graph, "bob", "alice")
    add_follow(graph, "alice", "bob")

    result = services.follows.remove_follower("alice", "bob")

    assert result.success is True
    assert not graph.relationship_exists("bob", "alice", RelationshipType.FOLLOWING)
    assert graph.relationship_exists("alice", "bob", RelationshipType.FOLLOWING)
    assert graph.find_node("alice").followers_number == 0
    assert graph.find_node("bob").following_number == 0


def test_remove_follower_requires_an_existing_follower(services, graph) -> None:
    add_user(graph, "alice")
    add_user(graph, "bob")

    result = services.follows.remove_follower("alice", "bob")

    assert result.status_code == HTTPStatus.FORBIDDEN
    assert result.message == "User is not following you"


def test_get_following_is_paginated_and_enriched(services, graph) -> None:
    add_user(graph, "alice")
    for i in range(3):
        add_user(graph, f"f{i}")
        add_follow(graph, "alice", f"f{i}")
    add_follow(graph, "f1", "alice")

    first = services.follows.get_following("alice", 0, 2)
    second = services.follows.get_following("alice", 1, 2)

    assert [u.user_id for u in first.users] == ["f0", "f1"]
    assert first.meta.is_last_page is False
    assert first.meta.total == 2
    assert [u.user_id for u in second.users] == ["f2"]
    assert second.meta.is_last_page is True
    assert all(u.is_following for u in first.users)
    assert [u.is_follower for u in first.users] == [False, True]


def test_get_followers_lists_incoming_edges(services, graph) -> None:
    for uid in ("alice", "bob", "carol"):
        add_user(graph, uid)
    add_follow(graph, "bob", "alice")
    add_follow(graph, "carol", "alice")

    result = services.follows.get_followers("alice", 0, 10)

    assert result.success is True
    assert [u.user_id for u in result.users] == ["bob", "carol"]
    assert all(u.is_follower for u in result.users)
    body = result.to_dict()
    assert body["statusCode"] == 200
    assert body["data"]["meta"] == {"total": 2, "page": 0, "limit": 10, "is_last_page": True}


def test_lists_reject_bad_pagination(services) -> None:
    assert services.follows.get_followers("alice", -1, 10).status_code == HTTPStatus.BAD_REQUEST
    assert services.follows.get_following("alice", 0, 0).status_code == HTTPStatus.BAD_REQUEST


def test_follow_from_unknown_viewer_is_rejected(services, graph) -> None:
    add_user(graph, "bob")

    result = services.follows.follow("ghost", "bob")

    assert result.status_code == HTTPStatus.BAD_REQUEST
    assert result.message == "User not found"
    assert graph.find_node("bob").followers_number == 0
