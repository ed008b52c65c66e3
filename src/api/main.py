"""
FastAPI backend: REST surface over the relationship services.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from http import HTTPStatus
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from neo4j import GraphDatabase
from pydantic import BaseModel

from api.config import Settings
from socialgraph import (
    Neo4jGraphBackend,
    RedisCacheStore,
    RedisNotificationPublisher,
    RelationshipServices,
    Response,
    UserNode,
    build_services,
)

settings = Settings.from_env()

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=settings.log_level,
)
logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"
DEFAULT_PAGE = 0
DEFAULT_LIMIT = 20


def _get_driver():
    return GraphDatabase.driver(
        settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    driver = _get_driver()
    cache = RedisCacheStore.from_url(settings.redis_url)
    try:
        graph = Neo4jGraphBackend(driver)
        graph.ensure_constraints()
        app.state.services = build_services(
            graph,
            cache,
            RedisNotificationPublisher(cache.client, settings.notification_channel),
            logger=logging.getLogger("socialgraph"),
        )
        logger.info("Relationship services ready (neo4j=%s)", settings.neo4j_uri)
        yield
    finally:
        app.state.services = None
        driver.close()
        cache.close()


app = FastAPI(title="Socialgraph API", lifespan=lifespan)


def get_services(request: Request) -> RelationshipServices:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(status_code=503, detail="Services not initialised")
    return services


def _viewer_id(x_user_id: str | None) -> str:
    viewer = (x_user_id or "").strip()
    if not viewer:
        raise HTTPException(status_code=401, detail=f"{USER_ID_HEADER} header is required")
    return viewer


def _respond(result: Response) -> JSONResponse:
    return JSONResponse(content=result.to_dict(), status_code=int(result.status_code))


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: user node sync ---


class UserBody(BaseModel):
    user_id: str
    username: str = ""
    display_name: str = ""
    role: str = "user"
    avatar_reference: str = ""

    def to_node(self) -> UserNode:
        return UserNode(
            user_id=self.user_id,
            username=self.username,
            display_name=self.display_name,
            role=self.role,
            avatar_reference=self.avatar_reference,
        )


def _invalid_body(exc: ValueError) -> JSONResponse:
    return _respond(Response.fail(HTTPStatus.BAD_REQUEST, str(exc)))


@app.post("/users")
def create_user(body: UserBody, request: Request):
    try:
        node = body.to_node()
    except ValueError as exc:
        return _invalid_body(exc)
    return _respond(get_services(request).users.create_user(node))


@app.put("/users/{user_id}")
def update_user(user_id: str, body: UserBody, request: Request):
    try:
        node = body.to_node()
    except ValueError as exc:
        return _invalid_body(exc)
    if node.user_id != user_id:
        raise HTTPException(status_code=400, detail="user_id mismatch")
    return _respond(get_services(request).users.update_user(node))


@app.get("/users/{user_id}")
def get_user(user_id: str, request: Request):
    return _respond(get_services(request).users.get_user(user_id))


# --- REST: follow / block ---


@app.post("/follow/{user_id}")
def follow(
    user_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    return _respond(get_services(request).follows.follow(_viewer_id(x_user_id), user_id))


@app.delete("/follow/{user_id}")
def unfollow(
    user_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    return _respond(get_services(request).follows.unfollow(_viewer_id(x_user_id), user_id))


@app.delete("/followers/{user_id}")
def remove_follower(
    user_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    services = get_services(request)
    return _respond(services.follows.remove_follower(_viewer_id(x_user_id), user_id))


@app.post("/block/{user_id}")
def block(
    user_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    return _respond(get_services(request).blocks.block(_viewer_id(x_user_id), user_id))


@app.delete("/block/{user_id}")
def unblock(
    user_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    return _respond(get_services(request).blocks.unblock(_viewer_id(x_user_id), user_id))


# --- REST: lists ---


@app.get("/users/{user_id}/followers")
def get_followers(
    user_id: str, request: Request, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT
):
    return _respond(get_services(request).follows.get_followers(user_id, page, limit))


@app.get("/users/{user_id}/following")
def get_following(
    user_id: str, request: Request, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT
):
    return _respond(get_services(request).follows.get_following(user_id, page, limit))


@app.get("/blocked")
def get_blocked(
    request: Request,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    services = get_services(request)
    return _respond(services.blocks.get_blocked(_viewer_id(x_user_id), page, limit))


@app.get("/mutual/{user_id}")
def mutual_followers(
    user_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    services = get_services(request)
    return _respond(services.search.mutual_followers(_viewer_id(x_user_id), user_id))


@app.get("/followers/search")
def search_followers(
    q: str,
    request: Request,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    services = get_services(request)
    return _respond(
        services.search.search_followers(_viewer_id(x_user_id), q, page, limit)
    )


@app.get("/following/search")
def search_following(
    q: str,
    request: Request,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    services = get_services(request)
    return _respond(
        services.search.search_following(_viewer_id(x_user_id), q, page, limit)
    )


# --- REST: suggestions and interests ---


@app.get("/suggestions")
def get_suggestions(
    request: Request,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    services = get_services(request)
    return _respond(
        services.suggestions.get_suggestions(_viewer_id(x_user_id), page, limit)
    )


@app.get("/suggestions/interests")
def get_interest_suggestions(
    request: Request,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    services = get_services(request)
    return _respond(
        services.interests.get_interest_suggestions(_viewer_id(x_user_id), page, limit)
    )


class InterestsBody(BaseModel):
    interests: list[str]


@app.put("/interests")
def set_interests(
    body: InterestsBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    services = get_services(request)
    return _respond(
        services.interests.set_user_interests(_viewer_id(x_user_id), body.interests)
    )


@app.get("/interests")
def get_interests(
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    services = get_services(request)
    return _respond(services.interests.get_user_interests(_viewer_id(x_user_id)))
