"""Domain entities: UserNode, EnrichedUser, and the relationship vocabulary."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from enum import Enum

# Dedup cache namespaces and their windows (seconds).
SUGGESTION_CACHE_PREFIX = "suggestions"
INTEREST_SUGGESTION_CACHE_PREFIX = "interest_suggestions"
SUGGESTION_CACHE_TTL = 5 * 60
INTEREST_SUGGESTION_CACHE_TTL = 10 * 60


class RelationshipType(str, Enum):
    """Directed edge types between two User nodes."""

    FOLLOWING = "FOLLOWING"
    BLOCKED = "BLOCKED"


class Direction(str, Enum):
    """Edge direction relative to the user a query is anchored on."""

    OUTGOING = "outgoing"
    INCOMING = "incoming"


class Interest(str, Enum):
    # Social & community
    NETWORKING = "networking"
    CREATOR_ECONOMY = "creator_economy"
    SOCIAL_TOKENS = "social_tokens"
    COMMUNITY_BUILDING = "community_building"
    ONLINE_GAMING = "online_gaming"
    DIGITAL_COLLECTIBLES = "digital_collectibles"
    METAVERSE = "metaverse"
    MEMES = "memes"
    DEFI = "defi"
    DAO = "dao"
    SECURITY = "security"
    # Career & growth
    STARTUPS = "startups"
    TECH_INNOVATION = "tech_innovation"
    ENTREPRENEURSHIP = "entrepreneurship"
    FREELANCING = "freelancing"
    OPEN_SOURCE = "open_source"
    RESEARCH_LEARNING = "research_learning"
    CODING_DEVELOPMENT = "coding_development"
    # Lifestyle & hobbies
    MUSIC = "music"
    ANIME_MANGA = "anime_manga"
    ESPORTS = "esports"
    FITNESS = "fitness"
    SPORT = "sport"
    MOVIES = "movies"
    TRAVEL = "travel"
    FOOD_COOKING = "food_cooking"
    FASHION_STYLE = "fashion_style"
    # Finance & future
    INVESTING = "investing"
    TRADING = "trading"
    CRYPTO_ARBITRAGE = "crypto_arbitrage"
    PERSONAL_FINANCE = "personal_finance"
    GLOBAL_ECONOMY = "global_economy"
    AI = "ai"
    SUSTAINABILITY = "sustainability"

    OTHER = "other"


@dataclass(frozen=True)
class UserNode:
    """
    A User node as stored in the graph.
    following_number / followers_number mirror the FOLLOWING edge counts and are
    only ever changed by the same statement that creates or deletes an edge.
    """

    user_id: str
    username: str = ""
    display_name: str = ""
    role: str = "user"
    avatar_reference: str = ""
    following_number: int = 0
    followers_number: int = 0

    def __post_init__(self):
        if not self.user_id or not str(self.user_id).strip():
            raise ValueError("UserNode user_id must be non-empty.")

    @classmethod
    def from_properties(cls, properties: Mapping) -> "UserNode":
        """Build from raw node properties (Neo4j node or plain dict)."""
        return cls(
            user_id=str(properties["user_id"]),
            username=properties.get("username") or "",
            display_name=properties.get("display_name") or "",
            role=properties.get("role") or "user",
            avatar_reference=properties.get("avatar_reference") or "",
            following_number=int(properties.get("following_number") or 0),
            followers_number=int(properties.get("followers_number") or 0),
        )

    def to_properties(self) -> dict:
        return asdict(self)

    def to_dict(self) -> dict:
        return self.to_properties()


@dataclass(frozen=True)
class EnrichedUser:
    """
    A UserNode annotated with its relationship to one viewing user.
    Built fresh per response; never persisted.
    """

    user: UserNode
    is_following: bool = False
    is_follower: bool = False
    is_blocked: bool = False
    is_blocked_by: bool = False
    mutual_followers_number: int = 0

    @property
    def user_id(self) -> str:
        return self.user.user_id

    def to_dict(self) -> dict:
        out = self.user.to_properties()
        out.update(
            is_following=self.is_following,
            is_follower=self.is_follower,
            is_blocked=self.is_blocked,
            is_blocked_by=self.is_blocked_by,
            mutual_followers_number=self.mutual_followers_number,
        )
        return out
