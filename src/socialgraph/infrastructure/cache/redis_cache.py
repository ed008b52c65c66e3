"""Redis implementation of CacheStore. Values are stored as JSON strings."""

import json
import logging

import redis

logger = logging.getLogger(__name__)


class RedisCacheStore:
    """Thin JSON wrapper over a Redis client. Redis errors propagate to the caller."""

    def __init__(self, client: redis.Redis) -> None:
        self._redis = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCacheStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        return cls(client)

    def get(self, key: str):
        data = self._redis.get(key)
        if data is None:
            return None
        try:
            return json.loads(data)
        except ValueError:
            logger.debug("Cache value for key=%r is not JSON", key)
            return data

    def set(self, key: str, value, ttl_seconds: int) -> None:
        self._redis.set(key, json.dumps(value, default=str), ex=ttl_seconds)

    def delete(self, key: str) -> None:
        self._redis.delete(key)

    @property
    def client(self) -> redis.Redis:
        return self._redis

    def close(self) -> None:
        self._redis.close()
