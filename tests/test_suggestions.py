"""Friend-of-friend suggestions: tier switching, pagination, and cache dedup."""

import logging
from http import HTTPStatus

import pytest
from conftest import add_follow, add_user

from socialgraph import build_services
from socialgraph.application.suggest_service import SECOND_DEGREE, THIRD_DEGREE
from socialgraph.domain import SUGGESTION_CACHE_TTL

KEY = "suggestions:viewer"


@pytest.fixture
def pool(graph):
    """viewer -> hub -> c00..c24: a 2nd-degree pool of 25 users."""
    add_user(graph, "viewer")
    add_user(graph, "hub")
    add_follow(graph, "viewer", "hub")
    for i in range(25):
        add_user(graph, f"c{i:02d}")
        add_follow(graph, "hub", f"c{i:02d}")
    return graph


def _ids(result):
    return [u.user_id for u in result.users]


def test_pool_of_25_pages_through_second_degree(services, pool) -> None:
    pages = [services.suggestions.get_suggestions("viewer", p, 10) for p in range(3)]

    assert [len(r.users) for r in pages] == [10, 10, 5]
    assert [r.meta.is_last_page for r in pages] == [False, False, True]
    assert _ids(pages[0]) == [f"c{i:02d}" for i in range(10)]
    assert _ids(pages[2]) == [f"c{i:02d}" for i in range(20, 25)]

    candidates = services.suggestions.fetch_candidates("viewer", 2, 10)
    assert candidates.tier == SECOND_DEGREE
    assert candidates.third_degree_start_page == 3


def test_page_at_start_page_switches_to_third_degree(services, pool) -> None:
    candidates = services.suggestions.fetch_candidates("viewer", 3, 10)

    assert candidates.tier == THIRD_DEGREE
    assert candidates.users == []
    assert candidates.is_last_page is True


def test_third_degree_is_always_queried_at_the_start_page(services, graph, monkeypatch) -> None:
    add_user(graph, "viewer")
    add_user(graph, "hub")
    add_follow(graph, "viewer", "hub")
    for i in range(5):
        add_user(graph, f"c{i}")
        add_follow(graph, "hub", f"c{i}")
    for i in range(15):
        add_user(graph, f"d{i:02d}")
        add_follow(graph, "c0", f"d{i:02d}")
    calls = []
    real = graph.third_degree

    def spy(user_id, page, limit):
        calls.append(page)
        return real(user_id, page, limit)

    monkeypatch.setattr(graph, "third_degree", spy)

    first = services.suggestions.get_suggestions("viewer", 1, 10)
    again = services.suggestions.get_suggestions("viewer", 2, 10)

    assert calls == [1, 1]
    assert _ids(first) == [f"d{i:02d}" for i in range(10, 15)]
    assert first.meta.is_last_page is True
    assert again.users == []
    assert again.meta.total == 5


def test_second_call_for_same_page_is_deduplicated(services, pool, cache) -> None:
    first = services.suggestions.get_suggestions("viewer", 0, 10)
    second = services.suggestions.get_suggestions("viewer", 0, 10)

    assert len(first.users) == 10
    assert second.success is True
    assert second.users == []
    assert second.meta.total == 10
    assert second.meta.is_last_page is False
    assert cache.get(KEY) == [f"c{i:02d}" for i in range(10)]


def test_cached_ids_are_filtered_and_the_set_only_grows(services, pool, cache) -> None:
    cache.set(KEY, ["c03", "c07", "zz-elsewhere"], SUGGESTION_CACHE_TTL)

    result = services.suggestions.get_suggestions("viewer", 0, 10)

    returned = set(_ids(result))
    assert returned.isdisjoint({"c03", "c07"})
    assert len(returned) == 8
    expected = {f"c{i:02d}" for i in range(10)} | {"zz-elsewhere"}
    assert cache.get(KEY) == sorted(expected)


def test_dedup_window_expires_with_ttl(services, pool, clock) -> None:
    services.suggestions.get_suggestions("viewer", 0, 10)
    clock.advance(SUGGESTION_CACHE_TTL - 1)
    assert services.suggestions.get_suggestions("viewer", 0, 10).users == []

    clock.advance(SUGGESTION_CACHE_TTL)

    assert len(services.suggestions.get_suggestions("viewer", 0, 10).users) == 10


def test_malformed_cache_value_counts_as_empty(services, pool, cache) -> None:
    cache.set(KEY, {"not": "a list"}, SUGGESTION_CACHE_TTL)

    result = services.suggestions.get_suggestions("viewer", 0, 10)

    assert len(result.users) == 10
    assert cache.get(KEY) == [f"c{i:02d}" for i in range(10)]


def test_cache_read_failure_does_not_fail_the_request(services, pool, cache, monkeypatch) -> None:
    def broken(key):
        raise ConnectionError("redis down")

    monkeypatch.setattr(cache, "get", broken)

    result = services.suggestions.get_suggestions("viewer", 0, 10)

    assert result.success is True
    assert len(result.users) == 10


def test_cache_write_failure_does_not_fail_the_request(services, pool, cache, monkeypatch) -> None:
    def broken(key, value, ttl_seconds):
        raise ConnectionError("redis down")

    monkeypatch.setattr(cache, "set", broken)

    first = services.suggestions.get_suggestions("viewer", 0, 10)
    second = services.suggestions.get_suggestions("viewer", 0, 10)

    assert len(first.users) == 10
    assert len(second.users) == 10


def test_viewers_have_independent_dedup_sets(services, pool, graph) -> None:
    add_user(graph, "other")
    add_follow(graph, "other", "hub")
    services.suggestions.get_suggestions("viewer", 0, 10)

    result = services.suggestions.get_suggestions("other", 0, 10)

    assert len(result.users) == 10


def test_suggestions_are_enriched_for_the_viewer(services, pool, graph) -> None:
    add_follow(graph, "c01", "viewer")

    result = services.suggestions.get_suggestions("viewer", 0, 10)

    by_id = {u.user_id: u for u in result.users}
    assert by_id["c01"].is_follower is True
    assert by_id["c01"].is_following is False
    assert by_id["c00"].mutual_followers_number == 1


def test_enrichment_failure_shortens_page_but_keeps_meta(services, pool, graph, monkeypatch) -> None:
    real = graph.common_connection

    def flaky(from_id, to_id):
        if to_id == "c04":
            raise RuntimeError("timeout")
        return real(from_id, to_id)

    monkeypatch.setattr(graph, "common_connection", flaky)

    result = services.suggestions.get_suggestions("viewer", 0, 10)

    assert len(result.users) == 9
    assert "c04" not in _ids(result)
    assert result.meta.total == 10
    assert result.meta.is_last_page is False


def test_graph_failure_is_a_500_envelope(services, graph, monkeypatch) -> None:
    def broken(user_id):
        raise RuntimeError("neo4j unavailable")

    monkeypatch.setattr(graph, "second_degree_count", broken)

    result = services.suggestions.get_suggestions("viewer", 0, 10)

    assert result.success is False
    assert result.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert result.message == "Failed to get suggestions"


def test_bad_pagination_is_rejected(services) -> None:
    assert services.suggestions.get_suggestions("viewer", 0, 0).status_code == HTTPStatus.BAD_REQUEST


def test_custom_logger_is_used(graph, cache, notifications, pool, caplog) -> None:
    services = build_services(
        graph, cache, notifications, logger=logging.getLogger("tests.relationship")
    )

    with caplog.at_level(logging.INFO, logger="tests.relationship"):
        services.suggestions.get_suggestions("viewer", 0, 10)

    assert any(
        r.name == "tests.relationship.suggestion_cache" and KEY in r.getMessage()
        for r in caplog.records
    )
