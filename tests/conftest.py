"""Shared in-memory fixtures. No Neo4j, Redis, or Docker needed."""

import pytest

from socialgraph import (
    InMemoryCacheStore,
    InMemoryGraphBackend,
    InMemoryNotificationPublisher,
    UserNode,
    build_services,
)
from socialgraph.domain import RelationshipType


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def add_user(graph, user_id: str, username: str | None = None, display_name: str | None = None) -> UserNode:
    return graph.upsert_user_node(
        UserNode(
            user_id=user_id,
            username=username or user_id,
            display_name=display_name or user_id.upper(),
        )
    )


def add_follow(graph, from_id: str, to_id: str) -> None:
    assert graph.create_edge(from_id, to_id, RelationshipType.FOLLOWING)


def add_block(graph, from_id: str, to_id: str) -> None:
    assert graph.create_edge(from_id, to_id, RelationshipType.BLOCKED)


@pytest.fixture
def graph():
    return InMemoryGraphBackend()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def notifications():
    return InMemoryNotificationPublisher()


@pytest.fixture
def services(graph, cache, notifications):
    return build_services(graph, cache, notifications)
