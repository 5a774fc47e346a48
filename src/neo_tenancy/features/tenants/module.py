"""Wiring for the tenant resolution feature.

The resolver and the invalidator must share one cache backend and one key
builder; ``TenancyModule.create`` guarantees that.
"""

from dataclasses import dataclass
from typing import Optional

from ...config.settings import ResolverSettings
from ..cache.entities.protocols import CacheBackendAdapter
from ..cache.factory import create_cache_backend
from .entities.protocols import TenantRepository
from .resolvers.cache_keys import ResolverCacheKeyBuilder
from .resolvers.domain_resolver import DomainTenantResolver
from .services.cache_invalidator import ResolverCacheInvalidator
from .services.domain_service import DomainService
from .services.tenant_service import TenantService


@dataclass
class TenancyModule:
    """Resolver, invalidation hooks and mutation services over one cache."""

    settings: ResolverSettings
    cache: CacheBackendAdapter
    resolver: DomainTenantResolver
    invalidator: ResolverCacheInvalidator
    tenants: TenantService
    domains: DomainService

    @classmethod
    def create(
        cls,
        repository: TenantRepository,
        settings: Optional[ResolverSettings] = None,
        cache: Optional[CacheBackendAdapter] = None,
    ) -> "TenancyModule":
        settings = settings or ResolverSettings()
        cache = cache or create_cache_backend(settings)
        key_builder = ResolverCacheKeyBuilder.from_settings(settings)

        invalidator = ResolverCacheInvalidator(repository, cache, settings, key_builder)
        return cls(
            settings=settings,
            cache=cache,
            resolver=DomainTenantResolver(repository, cache, settings, key_builder),
            invalidator=invalidator,
            tenants=TenantService(repository, invalidator),
            domains=DomainService(repository, invalidator),
        )

    async def start(self) -> None:
        await self.cache.connect()

    async def stop(self) -> None:
        await self.cache.disconnect()
