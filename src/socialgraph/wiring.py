"""Explicit composition of the relationship services around their collaborators."""

import logging
from dataclasses import dataclass

from socialgraph.application import (
    BlockService,
    CacheStore,
    FollowService,
    GraphBackend,
    InterestService,
    MutualService,
    NotificationPublisher,
    RelationshipEnricher,
    RelationshipQueries,
    SearchService,
    SuggestionDeduplicator,
    SuggestService,
    UserService,
)
from socialgraph.domain import (
    INTEREST_SUGGESTION_CACHE_PREFIX,
    INTEREST_SUGGESTION_CACHE_TTL,
    SUGGESTION_CACHE_PREFIX,
    SUGGESTION_CACHE_TTL,
)


@dataclass(frozen=True)
class RelationshipServices:
    users: UserService
    follows: FollowService
    blocks: BlockService
    search: SearchService
    suggestions: SuggestService
    interests: InterestService


def _child(logger: logging.Logger | None, name: str) -> logging.Logger:
    if logger is None:
        return logging.getLogger(f"socialgraph.{name}")
    return logger.getChild(name)


def build_services(
    graph: GraphBackend,
    cache: CacheStore,
    notifications: NotificationPublisher,
    *,
    logger: logging.Logger | None = None,
) -> RelationshipServices:
    """Assemble every service once; each receives its collaborators and a named logger."""
    queries = RelationshipQueries(graph, logger=_child(logger, "queries"))
    mutual = MutualService(graph, logger=_child(logger, "mutual"))
    enricher = RelationshipEnricher(graph, mutual, logger=_child(logger, "enrichment"))
    follows = FollowService(
        graph, queries, enricher, notifications, logger=_child(logger, "follow")
    )
    blocks = BlockService(graph, queries, follows, enricher, logger=_child(logger, "block"))
    search = SearchService(graph, mutual, enricher, logger=_child(logger, "search"))
    suggestion_dedup = SuggestionDeduplicator(
        cache,
        prefix=SUGGESTION_CACHE_PREFIX,
        ttl_seconds=SUGGESTION_CACHE_TTL,
        logger=_child(logger, "suggestion_cache"),
    )
    interest_dedup = SuggestionDeduplicator(
        cache,
        prefix=INTEREST_SUGGESTION_CACHE_PREFIX,
        ttl_seconds=INTEREST_SUGGESTION_CACHE_TTL,
        logger=_child(logger, "interest_cache"),
    )
    return RelationshipServices(
        users=UserService(graph, logger=_child(logger, "users")),
        follows=follows,
        blocks=blocks,
        search=search,
        suggestions=SuggestService(
            graph, suggestion_dedup, enricher, logger=_child(logger, "suggest")
        ),
        interests=InterestService(
            graph, interest_dedup, enricher, logger=_child(logger, "interest")
        ),
    )
