"""Resolver cache invalidation hooks.

Each hook is awaited by the service performing the mutation, before the
mutation returns. Hooks only ever delete entries. A failed delete raises
CacheInvalidationError so that a committed mutation never silently leaves
a stale entry behind.

Entries are keyed by domain, not tenant id, so a change to a tenant fans
out to every domain it owns. Creating, renaming or deleting a domain also
fans out to the owning tenant's other domains, since the tenant's key set
changed.
"""

import logging
from typing import Iterable, List, Optional

from ....config.settings import ResolverSettings
from ....core.exceptions import CacheError, CacheInvalidationError
from ....core.value_objects import TenantId
from ...cache.entities.protocols import CacheBackendAdapter
from ..entities.domain import Domain
from ..entities.protocols import TenantRepository
from ..entities.tenant import Tenant
from ..resolvers.cache_keys import ResolverCacheKeyBuilder
from ..utils.validation import DomainValidationRules

logger = logging.getLogger(__name__)


class ResolverCacheInvalidator:
    """Deletes resolver cache entries made stale by tenant and domain mutations."""

    def __init__(
        self,
        repository: TenantRepository,
        cache: CacheBackendAdapter,
        settings: Optional[ResolverSettings] = None,
        key_builder: Optional[ResolverCacheKeyBuilder] = None,
    ):
        """Initialize invalidator.

        Args:
            repository: Tenant repository used to look up owned domains
            cache: Cache backend shared with the resolver
            settings: Resolver settings; key layout must match the resolver's
            key_builder: Cache key derivation, built from settings when omitted
        """
        self._repository = repository
        self._cache = cache
        self._keys = key_builder or ResolverCacheKeyBuilder.from_settings(settings or ResolverSettings())

    async def possible_cache_keys(self, tenant_id: TenantId) -> List[str]:
        """Every key under which the tenant may currently be cached."""
        domains = await self._repository.find_domains_for_tenant(tenant_id)
        return [self._key(record.domain) for record in domains]

    async def invalidate_tenant(self, tenant_id: TenantId) -> List[str]:
        """Forget every cached lookup of the tenant."""
        return await self._forget(await self.possible_cache_keys(tenant_id))

    async def on_tenant_updated(self, tenant: Tenant) -> List[str]:
        """Tenant attributes changed: drop all of its domains."""
        return await self.invalidate_tenant(tenant.id)

    async def on_tenant_deleted(self, tenant: Tenant, domains: Iterable[Domain]) -> List[str]:
        """Tenant deleted: drop the domains it owned, captured before deletion."""
        return await self._forget(self._key(record.domain) for record in domains)

    async def on_domain_created(self, domain: Domain) -> List[str]:
        """Domain added: the new key was never cached, the tenant's others may be."""
        new_key = self._key(domain.domain)
        keys = [key for key in await self.possible_cache_keys(domain.tenant_id) if key != new_key]
        return await self._forget(keys)

    async def on_domain_changed(
        self,
        domain: Domain,
        old_domain: str,
        old_tenant_id: Optional[TenantId] = None,
    ) -> List[str]:
        """Domain renamed or moved: drop the old value and both owners' domains."""
        keys = [self._key(old_domain)]
        keys += await self.possible_cache_keys(domain.tenant_id)
        if old_tenant_id is not None and old_tenant_id != domain.tenant_id:
            keys += await self.possible_cache_keys(old_tenant_id)
        return await self._forget(keys)

    async def on_domain_deleted(self, domain: Domain) -> List[str]:
        """Domain removed: drop its key and the tenant's remaining domains."""
        keys = [self._key(domain.domain)]
        keys += await self.possible_cache_keys(domain.tenant_id)
        return await self._forget(keys)

    def _key(self, domain: str) -> str:
        # Must match the key the resolver derives from the normalized domain.
        return self._keys.build(DomainValidationRules.normalize(domain))

    async def _forget(self, keys: Iterable[str]) -> List[str]:
        """Delete keys, attempting all of them before reporting failures."""
        unique_keys = list(dict.fromkeys(keys))
        failed = {}

        for key in unique_keys:
            try:
                await self._cache.delete(key)
            except CacheError as e:
                failed[key] = str(e)

        if failed:
            logger.error(f"Resolver cache invalidation failed for {sorted(failed)}")
            raise CacheInvalidationError(
                f"Failed to invalidate {len(failed)} resolver cache entries",
                details={"keys": failed},
            )

        if unique_keys:
            logger.debug(f"Invalidated resolver cache keys {unique_keys}")
        return unique_keys
