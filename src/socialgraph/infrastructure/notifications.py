"""NotificationPublisher adapters: Redis pub/sub and an in-memory recorder."""

import json
import logging

import redis

logger = logging.getLogger(__name__)


class RedisNotificationPublisher:
    """Publishes {"event", "payload"} as JSON on one pub/sub channel. No delivery guarantee."""

    def __init__(self, client: redis.Redis, channel: str = "create_notification") -> None:
        self._redis = client
        self._channel = channel

    def publish(self, event: str, payload: dict) -> None:
        message = json.dumps({"event": event, "payload": payload}, default=str)
        receivers = self._redis.publish(self._channel, message)
        logger.debug("Published %s to %s (%s receivers)", event, self._channel, receivers)


class InMemoryNotificationPublisher:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def publish(self, event: str, payload: dict) -> None:
        self.events.append((event, dict(payload)))
