"""In-memory implementation of GraphBackend (no DB).

Nodes and edges keep insertion order, which is the order every listing returns.
"""

from socialgraph.domain import Direction, RelationshipType, UserNode

_PROFILE_FIELDS = ("username", "display_name", "role", "avatar_reference")


def _page(items: list, page: int, limit: int) -> list:
    skip = page * limit
    return items[skip : skip + limit]


class InMemoryGraphBackend:
    def __init__(self) -> None:
        self._users: dict[str, dict] = {}
        self._edges: list[tuple[str, str, RelationshipType]] = []
        self._interests: dict[str, list[str]] = {}

    def _out(self, user_id: str, rel_type: RelationshipType) -> list[str]:
        return [t for s, t, r in self._edges if s == user_id and r == rel_type]

    def _in(self, user_id: str, rel_type: RelationshipType) -> list[str]:
        return [s for s, t, r in self._edges if t == user_id and r == rel_type]

    def _nodes(self, user_ids: list[str]) -> list[UserNode]:
        return [UserNode.from_properties(self._users[uid]) for uid in user_ids]

    def _neighbors(
        self, user_id: str, rel_type: RelationshipType, direction: Direction
    ) -> list[str]:
        if direction == Direction.OUTGOING:
            return self._out(user_id, rel_type)
        return self._in(user_id, rel_type)

    def find_node(self, user_id: str) -> UserNode | None:
        props = self._users.get(user_id)
        if props is None:
            return None
        return UserNode.from_properties(props)

    def relationship_exists(
        self, from_id: str, to_id: str, rel_type: RelationshipType
    ) -> bool:
        return (from_id, to_id, rel_type) in self._edges

    def create_edge(self, from_id: str, to_id: str, rel_type: RelationshipType) -> bool:
        if from_id not in self._users or to_id not in self._users:
            return False
        if self.relationship_exists(from_id, to_id, rel_type):
            return False
        self._edges.append((from_id, to_id, rel_type))
        if rel_type == RelationshipType.FOLLOWING:
            self._users[from_id]["following_number"] += 1
            self._users[to_id]["followers_number"] += 1
        return True

    def delete_edge(self, from_id: str, to_id: str, rel_type: RelationshipType) -> bool:
        if not self.relationship_exists(from_id, to_id, rel_type):
            return False
        self._edges.remove((from_id, to_id, rel_type))
        if rel_type == RelationshipType.FOLLOWING:
            self._users[from_id]["following_number"] -= 1
            self._users[to_id]["followers_number"] -= 1
        return True

    def paged_neighbors(
        self,
        user_id: str,
        rel_type: RelationshipType,
        direction: Direction,
        page: int,
        limit: int,
    ) -> list[UserNode]:
        ids = self._neighbors(user_id, rel_type, direction)
        return self._nodes(_page(ids, page, limit))

    def _second_degree_ids(self, user_id: str) -> list[str]:
        following = self._out(user_id, RelationshipType.FOLLOWING)
        out: list[str] = []
        for a in following:
            for b in self._out(a, RelationshipType.FOLLOWING):
                if b != user_id and b not in following and b not in out:
                    out.append(b)
        return out

    def second_degree(self, user_id: str, page: int, limit: int) -> list[UserNode]:
        return self._nodes(_page(self._second_degree_ids(user_id), page, limit))

    def second_degree_count(self, user_id: str) -> int:
        return len(self._second_degree_ids(user_id))

    def third_degree(self, user_id: str, page: int, limit: int) -> list[UserNode]:
        following = self._out(user_id, RelationshipType.FOLLOWING)
        out: list[str] = []
        for a in following:
            for b in self._out(a, RelationshipType.FOLLOWING):
                for c in self._out(b, RelationshipType.FOLLOWING):
                    if c in (user_id, b) or c in following or c in out:
                        continue
                    out.append(c)
        return self._nodes(_page(out, page, limit))

    def common_connection(self, from_id: str, to_id: str) -> list[UserNode]:
        ids = [
            x
            for x in self._out(from_id, RelationshipType.FOLLOWING)
            if self.relationship_exists(x, to_id, RelationshipType.FOLLOWING)
        ]
        return self._nodes(ids)

    def substring_search(
        self, user_id: str, direction: Direction, query: str, page: int, limit: int
    ) -> list[UserNode]:
        needle = query.lower()
        matches = []
        for uid in self._neighbors(user_id, RelationshipType.FOLLOWING, direction):
            props = self._users[uid]
            if needle in (props.get("username") or "").lower() or needle in (
                props.get("display_name") or ""
            ).lower():
                matches.append(uid)
        return self._nodes(_page(matches, page, limit))

    def shared_interest_users(self, user_id: str, page: int, limit: int) -> list[UserNode]:
        mine = set(self._interests.get(user_id, []))
        ids = [
            uid
            for uid in self._users
            if uid != user_id and mine.intersection(self._interests.get(uid, []))
        ]
        return self._nodes(_page(ids, page, limit))

    def upsert_user_node(self, user: UserNode) -> UserNode:
        props = self._users.setdefault(
            user.user_id,
            {"user_id": user.user_id, "following_number": 0, "followers_number": 0},
        )
        props.update({f: getattr(user, f) for f in _PROFILE_FIELDS})
        return UserNode.from_properties(props)

    def update_user_node(self, user: UserNode) -> bool:
        props = self._users.get(user.user_id)
        if props is None:
            return False
        props.update({f: getattr(user, f) for f in _PROFILE_FIELDS})
        return True

    def set_user_interests(self, user_id: str, interests: list[str]) -> bool:
        if user_id not in self._users:
            return False
        self._interests[user_id] = list(dict.fromkeys(interests))
        return True

    def list_user_interests(self, user_id: str) -> list[str]:
        return list(self._interests.get(user_id, []))
