"""Process settings read from the environment (after .env is loaded by the entry point)."""

import os
from dataclasses import dataclass


def _env(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


@dataclass(frozen=True)
class Settings:
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    redis_url: str = "redis://localhost:6379/0"
    notification_channel: str = "create_notification"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            neo4j_uri=_env("NEO4J_URI", defaults.neo4j_uri),
            neo4j_user=_env("NEO4J_USER", defaults.neo4j_user),
            neo4j_password=_env("NEO4J_PASSWORD", defaults.neo4j_password),
            redis_url=_env("REDIS_URL", defaults.redis_url),
            notification_channel=_env("NOTIFICATION_CHANNEL", defaults.notification_channel),
            log_level=_env("LOG_LEVEL", defaults.log_level).upper(),
        )
