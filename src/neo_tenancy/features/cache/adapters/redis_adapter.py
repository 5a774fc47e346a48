"""Redis cache backend adapter for neo-tenancy."""

import logging
from typing import Optional

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    RedisError,
    TimeoutError as RedisTimeoutError,
)

from ..entities.config import CacheBackendConfig
from ....core.exceptions.infrastructure import CacheConnectionError, CacheError

logger = logging.getLogger(__name__)


class RedisAdapter:
    """Redis cache backend adapter.

    Shared between processes, so an invalidation issued by one worker is
    visible to every other worker on its next lookup.
    """

    def __init__(self, config: CacheBackendConfig, redis_client: Optional[Redis] = None):
        self.config = config
        self.redis_client: Optional[Redis] = redis_client
        self.connection_pool: Optional[ConnectionPool] = None
        self._connected = False

    async def connect(self) -> None:
        """Connect to Redis."""
        if self._connected:
            return

        try:
            if self.redis_client is None:
                self.connection_pool = ConnectionPool.from_url(
                    self.config.redis_url, **self.config.to_connection_kwargs()
                )
                self.redis_client = Redis(connection_pool=self.connection_pool)

            await self.redis_client.ping()
            self._connected = True
            logger.info("Connected to Redis cache backend")

        except RedisError as e:
            raise CacheConnectionError(f"Failed to connect to Redis: {e}")

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis_client:
            try:
                await self.redis_client.aclose()
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            finally:
                self.redis_client = None
                self.connection_pool = None
                self._connected = False

    async def get(self, key: str) -> Optional[bytes]:
        """Get value by key."""
        await self._ensure_connected()

        try:
            return await self.redis_client.get(key)
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise CacheConnectionError(f"Redis unavailable getting key {key}: {e}")
        except RedisError as e:
            raise CacheError(f"Redis get error for key {key}: {e}")

    async def set(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        """Set key-value pair; ttl of None stores without expiry."""
        await self._ensure_connected()

        try:
            await self.redis_client.set(key, value, ex=ttl if ttl and ttl > 0 else None)
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise CacheConnectionError(f"Redis unavailable setting key {key}: {e}")
        except RedisError as e:
            raise CacheError(f"Redis set error for key {key}: {e}")

    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        await self._ensure_connected()

        try:
            return await self.redis_client.delete(key) > 0
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise CacheConnectionError(f"Redis unavailable deleting key {key}: {e}")
        except RedisError as e:
            raise CacheError(f"Redis delete error for key {key}: {e}")

    async def exists(self, key: str) -> bool:
        """Check if key exists."""
        await self._ensure_connected()

        try:
            return await self.redis_client.exists(key) > 0
        except RedisError as e:
            raise CacheError(f"Redis exists error for key {key}: {e}")

    async def clear(self) -> None:
        """Flush the configured Redis database."""
        await self._ensure_connected()

        try:
            await self.redis_client.flushdb()
        except RedisError as e:
            raise CacheError(f"Redis flush error: {e}")

    async def health_check(self) -> bool:
        """Check Redis health."""
        if not self._connected:
            return False

        try:
            await self.redis_client.ping()
            return True
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def _ensure_connected(self) -> None:
        if not self._connected:
            await self.connect()
