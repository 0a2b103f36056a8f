"""
Redis connection for the /health broker check.

The broker itself is driven by Celery; this module only keeps a pooled
client around so the API can tell whether Redis answers.
"""

import logging
import os
from typing import Optional

import redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RedisConfig:
    """REDIS_URL, falling back to the Celery broker URL."""

    def __init__(self):
        self.url = os.getenv("REDIS_URL") or os.getenv(
            "CELERY_BROKER_URL", "redis://localhost:6379/0"
        )
        self.max_connections = int(os.getenv("REDIS_MAX_CONNECTIONS", 20))


class RedisConnectionManager:
    """Pooled Redis client; the client is created on first use."""

    def __init__(self, url: str, max_connections: int = 20):
        self.connection_pool = redis.ConnectionPool.from_url(
            url,
            max_connections=max_connections,
            retry_on_timeout=True,
            socket_keepalive=True,
        )
        self._client: Optional[redis.Redis] = None

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis(connection_pool=self.connection_pool)
        return self._client

    def health_check(self) -> bool:
        try:
            return bool(self.client.ping())
        except RedisError as e:
            logger.debug(f"Redis ping failed: {e}")
            return False


_manager: Optional[RedisConnectionManager] = None


def init_redis(config: Optional[RedisConfig] = None) -> RedisConnectionManager:
    """Create the process-wide connection manager (no connection is opened yet)."""
    global _manager
    config = config or RedisConfig()
    _manager = RedisConnectionManager(config.url, config.max_connections)
    return _manager


def redis_health_check() -> bool:
    """False when Redis was never initialized or does not answer PING."""
    return _manager is not None and _manager.health_check()
