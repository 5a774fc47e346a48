"""Cache backend configuration."""

from dataclasses import dataclass
from typing import Any, Dict

from .protocols import CacheBackendType


@dataclass
class CacheBackendConfig:
    """Configuration for a specific cache backend."""

    backend_type: CacheBackendType = CacheBackendType.MEMORY

    # Redis connection settings
    redis_url: str = "redis://localhost:6379/0"
    connection_timeout: int = 5
    command_timeout: int = 3

    # Memory settings
    max_size: int = 10000

    @classmethod
    def from_settings(cls, settings: Any) -> "CacheBackendConfig":
        """Build backend config from resolver settings."""
        return cls(
            backend_type=CacheBackendType(settings.cache_backend),
            redis_url=settings.redis_url,
            connection_timeout=settings.redis_connection_timeout,
            command_timeout=settings.redis_command_timeout,
            max_size=settings.memory_max_size,
        )

    def to_connection_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``redis.asyncio.ConnectionPool.from_url``."""
        return {
            "socket_connect_timeout": self.connection_timeout,
            "socket_timeout": self.command_timeout,
            "decode_responses": False,
        }
