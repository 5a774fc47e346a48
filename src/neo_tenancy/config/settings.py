"""Resolver settings.

Settings are read from ``NEO_TENANCY_*`` environment variables (or a
``.env`` file) and passed explicitly to the resolver at construction.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..features.cache.entities.protocols import CacheBackendType

# TTL sentinel: entries never expire and are removed only by invalidation.
CACHE_FOREVER: Optional[int] = None


class ResolverSettings(BaseSettings):
    """Settings for the cached domain resolver and its cache backend."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Resolver behaviour
    caching_enabled: bool = Field(default=False, description="Cache domain lookups")
    cache_ttl: Optional[int] = Field(
        default=CACHE_FOREVER, ge=1, description="Entry TTL in seconds, None caches forever"
    )
    cache_key_prefix: str = Field(default="_tenancy_resolver", min_length=1, description="Cache key namespace")
    resolver_name: str = Field(default="domain", min_length=1, description="Resolver segment of cache keys")

    # Backend selection
    cache_backend: CacheBackendType = Field(default=CacheBackendType.MEMORY, description="Cache backend")
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    redis_connection_timeout: int = Field(default=5, ge=1, description="Redis connection timeout")
    redis_command_timeout: int = Field(default=3, ge=1, description="Redis command timeout")
    memory_max_size: int = Field(default=10000, ge=1, description="Max memory cache entries")
