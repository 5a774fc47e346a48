"""Cached domain → tenant resolver.

Cache-aside lookup: read the cache, fall back to the store on a miss and
write the found tenant back. Not-found results are never cached, so a
tenant created later resolves immediately. Entries are kept correct by
``ResolverCacheInvalidator``, which deletes them whenever a tenant or one
of its domains changes.
"""

import logging
from typing import Optional

from ....config.settings import ResolverSettings
from ....core.exceptions import CacheError, TenantCouldNotBeIdentifiedError
from ...cache.entities.protocols import CacheBackendAdapter
from ..entities.protocols import TenantStore
from ..entities.tenant import Tenant
from ..utils.validation import DomainValidationRules
from .cache_keys import ResolverCacheKeyBuilder
from .serializer import TenantSnapshotSerializer

logger = logging.getLogger(__name__)


class DomainTenantResolver:
    """Resolves tenants by domain with an optional cache in front of the store."""

    def __init__(
        self,
        store: TenantStore,
        cache: CacheBackendAdapter,
        settings: Optional[ResolverSettings] = None,
        key_builder: Optional[ResolverCacheKeyBuilder] = None,
        serializer: Optional[TenantSnapshotSerializer] = None,
    ):
        """Initialize resolver.

        Args:
            store: Uncached tenant lookup
            cache: Cache backend shared with the invalidator
            settings: Resolver settings; ``caching_enabled`` may be flipped at runtime
            key_builder: Cache key derivation, built from settings when omitted
            serializer: Tenant snapshot codec
        """
        self._store = store
        self._cache = cache
        self.settings = settings or ResolverSettings()
        self._keys = key_builder or ResolverCacheKeyBuilder.from_settings(self.settings)
        self._serializer = serializer or TenantSnapshotSerializer()

    def get_cache_key(self, domain: str) -> str:
        """Cache key under which ``domain`` is stored."""
        return self._keys.build(DomainValidationRules.normalize(domain))

    async def resolve(self, domain: str) -> Tenant:
        """Resolve the tenant owning ``domain``.

        Raises:
            TenantCouldNotBeIdentifiedError: no domain record matches
        """
        domain = DomainValidationRules.normalize(domain)

        if not self.settings.caching_enabled:
            return await self.resolve_without_cache(domain)

        key = self._keys.build(domain)

        cached = await self._read_cache(key)
        if cached is not None:
            logger.debug(f"Resolver cache hit for {key}")
            return cached

        logger.debug(f"Resolver cache miss for {key}")
        tenant = await self.resolve_without_cache(domain)

        await self._write_cache(key, tenant)
        return tenant

    async def resolve_without_cache(self, domain: str) -> Tenant:
        """Look up the tenant in the store, bypassing the cache."""
        domain = DomainValidationRules.normalize(domain)

        tenant = await self._store.find_by_domain(domain)
        if tenant is None:
            raise TenantCouldNotBeIdentifiedError(domain)

        return tenant

    async def _read_cache(self, key: str) -> Optional[Tenant]:
        # Backend and decode failures degrade to a miss.
        try:
            payload = await self._cache.get(key)
        except CacheError as e:
            logger.warning(f"Resolver cache read failed for {key}, using store: {e}")
            return None

        if payload is None:
            return None

        try:
            return self._serializer.loads(payload)
        except CacheError as e:
            logger.warning(f"Discarding unreadable resolver cache entry {key}: {e}")
            return None

    async def _write_cache(self, key: str, tenant: Tenant) -> None:
        try:
            await self._cache.set(key, self._serializer.dumps(tenant), ttl=self.settings.cache_ttl)
        except CacheError as e:
            logger.warning(f"Resolver cache write failed for {key}: {e}")
