"""Result envelopes returned by every application service.

All envelopes render to {success, statusCode, message, data?, error?}.
"""

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from socialgraph.domain import EnrichedUser


def _render(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_render(v) for v in value]
    if isinstance(value, dict):
        return {k: _render(v) for k, v in value.items()}
    return value


@dataclass(frozen=True)
class PaginationMeta:
    total: int
    page: int
    limit: int
    is_last_page: bool

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "is_last_page": self.is_last_page,
        }


@dataclass(frozen=True)
class PaginatedUsers:
    users: list[EnrichedUser] = field(default_factory=list)
    meta: PaginationMeta | None = None

    def to_dict(self) -> dict:
        return {
            "users": [u.to_dict() for u in self.users],
            "meta": self.meta.to_dict() if self.meta else None,
        }


@dataclass(frozen=True)
class Response:
    """Uniform result of a public operation. Never raised, always returned."""

    success: bool
    status_code: int
    message: str
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "Response":
        return cls(success=True, status_code=HTTPStatus.OK, message=message, data=data)

    @classmethod
    def fail(
        cls, status_code: int, message: str, *, data: Any = None, error: str | None = None
    ) -> "Response":
        return cls(
            success=False,
            status_code=status_code,
            message=message,
            data=data,
            error=error,
        )

    @classmethod
    def internal_error(cls, message: str) -> "Response":
        return cls.fail(HTTPStatus.INTERNAL_SERVER_ERROR, message)

    @classmethod
    def paginated(
        cls,
        message: str,
        users: list[EnrichedUser],
        *,
        total: int,
        page: int,
        limit: int,
        is_last_page: bool,
    ) -> "Response":
        meta = PaginationMeta(
            total=total, page=page, limit=limit, is_last_page=is_last_page
        )
        return cls.ok(message, PaginatedUsers(users=list(users), meta=meta))

    @property
    def users(self) -> list[EnrichedUser]:
        """Users of a paginated or list payload; empty for any other payload."""
        if isinstance(self.data, PaginatedUsers):
            return self.data.users
        if isinstance(self.data, list):
            return [u for u in self.data if isinstance(u, EnrichedUser)]
        return []

    @property
    def meta(self) -> PaginationMeta | None:
        if isinstance(self.data, PaginatedUsers):
            return self.data.meta
        return None

    def to_dict(self) -> dict:
        out = {
            "success": self.success,
            "statusCode": int(self.status_code),
            "message": self.message,
        }
        if self.data is not None:
            out["data"] = _render(self.data)
        if self.error is not None:
            out["error"] = self.error
        return out


def check_pagination(page: int, limit: int) -> Response | None:
    """Return a 400 envelope for an unusable page/limit pair, else None."""
    if page < 0 or limit < 1:
        return Response.fail(
            HTTPStatus.BAD_REQUEST, "page must be >= 0 and limit must be >= 1"
        )
    return None
