"""Application layer: use cases, ports, and result envelopes. Depends only on domain."""

from socialgraph.application.block_service import BlockService
from socialgraph.application.dto import PaginatedUsers, PaginationMeta, Response
from socialgraph.application.enrichment import RelationshipEnricher
from socialgraph.application.follow_service import FollowService
from socialgraph.application.interest_service import InterestService
from socialgraph.application.mutual_service import MutualService
from socialgraph.application.ports import CacheStore, GraphBackend, NotificationPublisher
from socialgraph.application.relationship_queries import RelationshipQueries
from socialgraph.application.search_service import SearchService
from socialgraph.application.suggest_service import CandidatePage, SuggestService
from socialgraph.application.suggestion_cache import SuggestionDeduplicator
from socialgraph.application.user_service import UserService

__all__ = [
    "BlockService",
    "CacheStore",
    "CandidatePage",
    "FollowService",
    "GraphBackend",
    "InterestService",
    "MutualService",
    "NotificationPublisher",
    "PaginatedUsers",
    "PaginationMeta",
    "RelationshipEnricher",
    "RelationshipQueries",
    "Response",
    "SearchService",
    "SuggestService",
    "SuggestionDeduplicator",
    "UserService",
]
