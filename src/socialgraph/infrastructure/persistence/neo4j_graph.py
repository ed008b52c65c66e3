"""Neo4j implementation of GraphBackend.

Graph: (:User {user_id, username, display_name, role, avatar_reference,
following_number, followers_number})-[:FOLLOWING|BLOCKED]->(:User), plus
(:User)-[:INTERESTED_IN]->(:Interest {name}).
Counter updates run in the same statement that creates or deletes a FOLLOWING edge.
Relationship types are interpolated from RelationshipType only; every value is a parameter.
"""

from socialgraph.domain import Direction, RelationshipType, UserNode

_CONSTRAINT_QUERIES = (
    """
    CREATE CONSTRAINT user_id_unique IF NOT EXISTS
    FOR (u:User) REQUIRE u.user_id IS UNIQUE
    """,
    """
    CREATE CONSTRAINT interest_name_unique IF NOT EXISTS
    FOR (i:Interest) REQUIRE i.name IS UNIQUE
    """,
)

_FIND_NODE_QUERY = """
MATCH (u:User {user_id: $user_id})
RETURN u
"""

_RELATIONSHIP_EXISTS_QUERY = """
MATCH (s:User {user_id: $from_id})-[r:%s]->(t:User {user_id: $to_id})
RETURN count(r) > 0 AS found
"""

_CREATE_FOLLOWING_QUERY = """
MATCH (s:User {user_id: $from_id}), (t:User {user_id: $to_id})
WHERE NOT (s)-[:FOLLOWING]->(t)
CREATE (s)-[:FOLLOWING]->(t)
SET s.following_number = coalesce(s.following_number, 0) + 1,
    t.followers_number = coalesce(t.followers_number, 0) + 1
RETURN count(*) AS created
"""

_CREATE_BLOCKED_QUERY = """
MATCH (s:User {user_id: $from_id}), (t:User {user_id: $to_id})
WHERE NOT (s)-[:BLOCKED]->(t)
CREATE (s)-[:BLOCKED]->(t)
RETURN count(*) AS created
"""

_DELETE_FOLLOWING_QUERY = """
MATCH (s:User {user_id: $from_id})-[r:FOLLOWING]->(t:User {user_id: $to_id})
DELETE r
SET s.following_number = coalesce(s.following_number, 1) - 1,
    t.followers_number = coalesce(t.followers_number, 1) - 1
RETURN count(*) AS deleted
"""

_DELETE_BLOCKED_QUERY = """
MATCH (s:User {user_id: $from_id})-[r:BLOCKED]->(t:User {user_id: $to_id})
DELETE r
RETURN count(*) AS deleted
"""

_OUTGOING_QUERY = """
MATCH (s:User {user_id: $user_id})-[:%s]->(u:User)
RETURN u
ORDER BY u.username, u.user_id
SKIP $skip LIMIT $limit
"""

_INCOMING_QUERY = """
MATCH (u:User)-[:%s]->(t:User {user_id: $user_id})
RETURN u
ORDER BY u.username, u.user_id
SKIP $skip LIMIT $limit
"""

_SECOND_DEGREE_MATCH = """
MATCH (me:User {user_id: $user_id})-[:FOLLOWING]->(:User)-[:FOLLOWING]->(fof:User)
WHERE NOT (me)-[:FOLLOWING]->(fof) AND me <> fof
"""

_SECOND_DEGREE_QUERY = (
    _SECOND_DEGREE_MATCH
    + """
RETURN DISTINCT fof AS u
ORDER BY u.user_id
SKIP $skip LIMIT $limit
"""
)

_SECOND_DEGREE_COUNT_QUERY = (
    _SECOND_DEGREE_MATCH
    + """
RETURN count(DISTINCT fof) AS total
"""
)

_THIRD_DEGREE_QUERY = """
MATCH (me:User {user_id: $user_id})-[:FOLLOWING]->(:User)-[:FOLLOWING]->(fof:User)-[:FOLLOWING]->(fofof:User)
WHERE NOT (me)-[:FOLLOWING]->(fofof) AND me <> fofof AND fof <> fofof
RETURN DISTINCT fofof AS u
ORDER BY u.user_id
SKIP $skip LIMIT $limit
"""

_COMMON_CONNECTION_QUERY = """
MATCH (s:User {user_id: $from_id})-[:FOLLOWING]->(x:User)-[:FOLLOWING]->(t:User {user_id: $to_id})
RETURN DISTINCT x AS u
ORDER BY u.user_id
"""

_SEARCH_FILTER = """
WHERE toLower(coalesce(u.username, '')) CONTAINS toLower($query)
   OR toLower(coalesce(u.display_name, '')) CONTAINS toLower($query)
RETURN u
ORDER BY u.username, u.user_id
SKIP $skip LIMIT $limit
"""

_SEARCH_FOLLOWING_QUERY = (
    "MATCH (me:User {user_id: $user_id})-[:FOLLOWING]->(u:User)" + _SEARCH_FILTER
)

_SEARCH_FOLLOWERS_QUERY = (
    "MATCH (u:User)-[:FOLLOWING]->(me:User {user_id: $user_id})" + _SEARCH_FILTER
)

_SHARED_INTEREST_QUERY = """
MATCH (me:User {user_id: $user_id})-[:INTERESTED_IN]->(:Interest)<-[:INTERESTED_IN]-(other:User)
WHERE other <> me
RETURN DISTINCT other AS u
ORDER BY u.user_id
SKIP $skip LIMIT $limit
"""

_UPSERT_USER_QUERY = """
MERGE (u:User {user_id: $user_id})
ON CREATE SET u.following_number = 0, u.followers_number = 0
SET u.username = $username,
    u.display_name = $display_name,
    u.role = $role,
    u.avatar_reference = $avatar_reference
RETURN u
"""

_UPDATE_USER_QUERY = """
MATCH (u:User {user_id: $user_id})
SET u.username = $username,
    u.display_name = $display_name,
    u.role = $role,
    u.avatar_reference = $avatar_reference
RETURN u
"""

_CLEAR_INTERESTS_QUERY = """
MATCH (u:User {user_id: $user_id})
OPTIONAL MATCH (u)-[old:INTERESTED_IN]->(:Interest)
DELETE old
RETURN count(DISTINCT u) AS found
"""

_ADD_INTERESTS_QUERY = """
MATCH (u:User {user_id: $user_id})
UNWIND $interests AS name
MERGE (i:Interest {name: name})
MERGE (u)-[:INTERESTED_IN]->(i)
"""

_LIST_INTERESTS_QUERY = """
MATCH (:User {user_id: $user_id})-[:INTERESTED_IN]->(i:Interest)
RETURN i.name AS name
ORDER BY name
"""


def _profile_params(user: UserNode) -> dict:
    return {
        "user_id": user.user_id,
        "username": user.username,
        "display_name": user.display_name,
        "role": user.role,
        "avatar_reference": user.avatar_reference,
    }


def _record_to_user(record) -> UserNode:
    return UserNode.from_properties(dict(record["u"]))


def _replace_interests(tx, user_id: str, interests: list[str]) -> bool:
    found = tx.run(_CLEAR_INTERESTS_QUERY, user_id=user_id).single()["found"]
    if not found:
        return False
    if interests:
        tx.run(_ADD_INTERESTS_QUERY, user_id=user_id, interests=interests).consume()
    return True


class Neo4jGraphBackend:
    """One session per call. Driver errors propagate to the application layer."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def ensure_constraints(self) -> None:
        """Create uniqueness constraints on User.user_id and Interest.name if missing."""
        with self._driver.session() as session:
            for query in _CONSTRAINT_QUERIES:
                session.run(query).consume()

    def _fetch_users(self, query: str, **params) -> list[UserNode]:
        with self._driver.session() as session:
            result = session.run(query, **params)
            return [_record_to_user(rec) for rec in result]

    def _count(self, query: str, key: str, **params) -> int:
        with self._driver.session() as session:
            record = session.run(query, **params).single()
        return int(record[key]) if record else 0

    def find_node(self, user_id: str) -> UserNode | None:
        with self._driver.session() as session:
            record = session.run(_FIND_NODE_QUERY, user_id=user_id).single()
        if not record:
            return None
        return _record_to_user(record)

    def relationship_exists(
        self, from_id: str, to_id: str, rel_type: RelationshipType
    ) -> bool:
        query = _RELATIONSHIP_EXISTS_QUERY % RelationshipType(rel_type).value
        with self._driver.session() as session:
            record = session.run(query, from_id=from_id, to_id=to_id).single()
        return bool(record and record["found"])

    def create_edge(self, from_id: str, to_id: str, rel_type: RelationshipType) -> bool:
        if RelationshipType(rel_type) == RelationshipType.FOLLOWING:
            query = _CREATE_FOLLOWING_QUERY
        else:
            query = _CREATE_BLOCKED_QUERY
        return self._count(query, "created", from_id=from_id, to_id=to_id) > 0

    def delete_edge(self, from_id: str, to_id: str, rel_type: RelationshipType) -> bool:
        if RelationshipType(rel_type) == RelationshipType.FOLLOWING:
            query = _DELETE_FOLLOWING_QUERY
        else:
            query = _DELETE_BLOCKED_QUERY
        return self._count(query, "deleted", from_id=from_id, to_id=to_id) > 0

    def paged_neighbors(
        self,
        user_id: str,
        rel_type: RelationshipType,
        direction: Direction,
        page: int,
        limit: int,
    ) -> list[UserNode]:
        template = _OUTGOING_QUERY if direction == Direction.OUTGOING else _INCOMING_QUERY
        query = template % RelationshipType(rel_type).value
        return self._fetch_users(query, user_id=user_id, skip=page * limit, limit=limit)

    def second_degree(self, user_id: str, page: int, limit: int) -> list[UserNode]:
        return self._fetch_users(
            _SECOND_DEGREE_QUERY, user_id=user_id, skip=page * limit, limit=limit
        )

    def third_degree(self, user_id: str, page: int, limit: int) -> list[UserNode]:
        return self._fetch_users(
            _THIRD_DEGREE_QUERY, user_id=user_id, skip=page * limit, limit=limit
        )

    def second_degree_count(self, user_id: str) -> int:
        return self._count(_SECOND_DEGREE_COUNT_QUERY, "total", user_id=user_id)

    def common_connection(self, from_id: str, to_id: str) -> list[UserNode]:
        return self._fetch_users(_COMMON_CONNECTION_QUERY, from_id=from_id, to_id=to_id)

    def substring_search(
        self, user_id: str, direction: Direction, query: str, page: int, limit: int
    ) -> list[UserNode]:
        if direction == Direction.OUTGOING:
            cypher = _SEARCH_FOLLOWING_QUERY
        else:
            cypher = _SEARCH_FOLLOWERS_QUERY
        return self._fetch_users(
            cypher, user_id=user_id, query=query, skip=page * limit, limit=limit
        )

    def shared_interest_users(self, user_id: str, page: int, limit: int) -> list[UserNode]:
        return self._fetch_users(
            _SHARED_INTEREST_QUERY, user_id=user_id, skip=page * limit, limit=limit
        )

    def upsert_user_node(self, user: UserNode) -> UserNode:
        with self._driver.session() as session:
            record = session.run(_UPSERT_USER_QUERY, **_profile_params(user)).single()
        return _record_to_user(record)

    def update_user_node(self, user: UserNode) -> bool:
        with self._driver.session() as session:
            record = session.run(_UPDATE_USER_QUERY, **_profile_params(user)).single()
        return record is not None

    def set_user_interests(self, user_id: str, interests: list[str]) -> bool:
        with self._driver.session() as session:
            return session.execute_write(_replace_interests, user_id, list(interests))

    def list_user_interests(self, user_id: str) -> list[str]:
        with self._driver.session() as session:
            result = session.run(_LIST_INTERESTS_QUERY, user_id=user_id)
            return [rec["name"] for rec in result]
