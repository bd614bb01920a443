"""
Redis cache client with connection pooling and JSON serialization.

Cache failures are logged and treated as misses; the database stays the
source of truth.
"""
import json
from typing import Optional, Any
from redis import asyncio as aioredis
from redis.exceptions import RedisError
from app.core.config import settings
from app.core.logging import logger


class RedisCache:
    """Async Redis cache over a shared connection pool."""

    def __init__(self, url: str = None, enabled: bool = None):
        self.url = url or settings.REDIS_URL
        self.enabled = settings.CACHE_ENABLED if enabled is None else enabled
        self._client: Optional[aioredis.Redis] = None

    def _get_client(self) -> aioredis.Redis:
        if self._client is None:
            pool = aioredis.ConnectionPool.from_url(
                self.url,
                decode_responses=True,
                max_connections=20,
                socket_connect_timeout=1,
            )
            self._client = aioredis.Redis(connection_pool=pool)
            logger.info("Redis connection pool created")
        return self._client

    async def get(self, key: str) -> Optional[Any]:
        """
        Read a JSON value.

        Returns:
            The decoded value, or None on a miss, when disabled, or when
            Redis cannot be reached
        """
        if not self.enabled:
            return None
        try:
            value = await self._get_client().get(key)
        except (RedisError, OSError) as e:
            logger.error(f"Redis GET error for key {key}: {e}")
            return None
        if value is None:
            return None
        return json.loads(value)

    async def set(self, key: str, value: Any, expire: int = 300) -> bool:
        """Store ``value`` as JSON for ``expire`` seconds; False if it was not stored."""
        if not self.enabled:
            return False
        try:
            await self._get_client().setex(key, expire, json.dumps(value, default=str))
        except (RedisError, OSError) as e:
            logger.error(f"Redis SET error for key {key}: {e}")
            return False
        return True

    async def delete(self, key: str) -> bool:
        if not self.enabled:
            return False
        try:
            await self._get_client().delete(key)
        except (RedisError, OSError) as e:
            logger.error(f"Redis DELETE error for key {key}: {e}")
            return False
        logger.debug(f"Invalidated cache key {key}")
        return True

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis connection pool closed")


def roster_key(event_id) -> str:
    return f"rsvps:attendees:{event_id}"


# Create a single instance to be imported throughout the app
cache = RedisCache()
