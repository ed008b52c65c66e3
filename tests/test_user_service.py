"""User node sync."""

from http import HTTPStatus

import pytest
from conftest import add_follow, add_user

from socialgraph import UserNode


def test_create_then_get_user(services) -> None:
    created = services.users.create_user(
        UserNode(user_id="u1", username="alice", display_name="Alice", avatar_reference="a.png")
    )
    fetched = services.users.get_user("u1")

    assert created.success is True
    assert fetched.data.username == "alice"
    assert fetched.data.avatar_reference == "a.png"
    assert fetched.data.following_number == 0
    assert services.users.user_exists("u1") is True


def test_create_existing_user_keeps_counters(services, graph) -> None:
    add_user(graph, "u1")
    add_user(graph, "u2")
    add_follow(graph, "u1", "u2")

    result = services.users.create_user(UserNode(user_id="u1", username="renamed"))

    assert result.data.username == "renamed"
    assert result.data.following_number == 1


def test_update_user_changes_profile_fields(services, graph) -> None:
    add_user(graph, "u1", username="old")

    result = services.users.update_user(UserNode(user_id="u1", username="new", role="admin"))

    assert result.success is True
    assert result.data.username == "new"
    assert graph.find_node("u1").role == "admin"


def test_update_missing_user_is_404(services) -> None:
    result = services.users.update_user(UserNode(user_id="ghost", username="x"))

    assert result.status_code == HTTPStatus.NOT_FOUND


def test_get_missing_user_is_404(services) -> None:
    assert services.users.get_user("ghost").status_code == HTTPStatus.NOT_FOUND
    assert services.users.user_exists("ghost") is False


def test_user_exists_is_false_on_backend_failure(services, graph, monkeypatch) -> None:
    def broken(user_id):
        raise RuntimeError("db gone")

    monkeypatch.setattr(graph, "find_node", broken)

    assert services.users.user_exists("u1") is False


def test_user_node_requires_an_id() -> None:
    with pytest.raises(ValueError):
        UserNode(user_id="  ")


def test_user_to_dict_round_trips_through_properties(services, graph) -> None:
    node = add_user(graph, "u1", username="alice")

    assert UserNode.from_properties(node.to_dict()) == node
