"""Tests for resolver cache invalidation hooks."""

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock

from neo_tenancy.config.settings import ResolverSettings
from neo_tenancy.core.exceptions import (
    CacheConnectionError,
    CacheError,
    CacheInvalidationError,
    TenantCouldNotBeIdentifiedError,
)
from neo_tenancy.core.value_objects import DomainId, TenantId
from neo_tenancy.features.tenants.entities.domain import Domain
from neo_tenancy.features.tenants.entities.tenant import Tenant
from neo_tenancy.features.tenants.resolvers.cache_keys import derive_cache_key
from neo_tenancy.features.tenants.resolvers.domain_resolver import DomainTenantResolver
from neo_tenancy.features.tenants.services.cache_invalidator import ResolverCacheInvalidator
from neo_tenancy.features.tenants.services.domain_service import DomainService
from neo_tenancy.features.tenants.services.tenant_service import TenantService


@pytest_asyncio.fixture
async def acme(repository):
    """Tenant owning acme.test and www.acme.test."""
    tenant = await repository.save_tenant(Tenant(id=TenantId("tenant-acme")))
    for value in ("acme.test", "www.acme.test"):
        await repository.save_domain(Domain(id=DomainId(f"domain-{value}"), domain=value, tenant_id=tenant.id))
    return tenant


@pytest.fixture
def failing_cache():
    """Cache backend whose deletes fail as if the server were down."""
    cache = AsyncMock()
    cache.delete.side_effect = CacheConnectionError("connection refused")
    return cache


class TestInvalidationHooks:
    """Keys deleted by each lifecycle hook."""

    @pytest.fixture
    def invalidator(self, repository, cache):
        return ResolverCacheInvalidator(repository, cache)

    @pytest.mark.asyncio
    async def test_tenant_updated_invalidates_all_domains(self, invalidator, acme):
        keys = await invalidator.on_tenant_updated(acme)

        assert keys == [derive_cache_key("acme.test"), derive_cache_key("www.acme.test")]

    @pytest.mark.asyncio
    async def test_tenant_deleted_uses_captured_domains(self, invalidator, repository, acme):
        domains = await repository.find_domains_for_tenant(acme.id)
        await repository.delete_tenant(acme.id)

        keys = await invalidator.on_tenant_deleted(acme, domains)

        assert keys == [derive_cache_key("acme.test"), derive_cache_key("www.acme.test")]

    @pytest.mark.asyncio
    async def test_domain_created_skips_the_new_key(self, invalidator, repository, acme):
        record = await repository.save_domain(
            Domain(id=DomainId("domain-new"), domain="new.acme.test", tenant_id=acme.id)
        )

        keys = await invalidator.on_domain_created(record)

        assert derive_cache_key("new.acme.test") not in keys
        assert derive_cache_key("acme.test") in keys

    @pytest.mark.asyncio
    async def test_domain_changed_invalidates_old_value(self, invalidator, repository, acme):
        record = await repository.find_domain(DomainId("domain-acme.test"))
        record.domain = "acme.example"
        await repository.update_domain(record)

        keys = await invalidator.on_domain_changed(record, "acme.test", acme.id)

        assert keys[0] == derive_cache_key("acme.test")
        assert derive_cache_key("www.acme.test") in keys

    @pytest.mark.asyncio
    async def test_domain_moved_invalidates_both_owners(self, invalidator, repository, acme):
        globex = await repository.save_tenant(Tenant(id=TenantId("tenant-globex")))
        await repository.save_domain(Domain(id=DomainId("domain-globex"), domain="globex.test", tenant_id=globex.id))

        record = await repository.find_domain(DomainId("domain-acme.test"))
        record.tenant_id = globex.id
        await repository.update_domain(record)

        keys = await invalidator.on_domain_changed(record, "acme.test", acme.id)

        assert set(keys) == {
            derive_cache_key("acme.test"),
            derive_cache_key("globex.test"),
            derive_cache_key("www.acme.test"),
        }
        assert len(keys) == len(set(keys))

    @pytest.mark.asyncio
    async def test_domain_deleted_invalidates_its_key(self, invalidator, repository, acme):
        record = await repository.find_domain(DomainId("domain-www.acme.test"))
        await repository.delete_domain(record.id)

        keys = await invalidator.on_domain_deleted(record)

        assert keys == [derive_cache_key("www.acme.test"), derive_cache_key("acme.test")]

    @pytest.mark.asyncio
    async def test_hooks_delete_cached_entries(self, invalidator, cache, acme):
        key = derive_cache_key("acme.test")
        await cache.set(key, b"{}")

        await invalidator.on_tenant_updated(acme)

        assert await cache.get(key) is None

    @pytest.mark.asyncio
    async def test_domain_values_are_normalized_before_deleting(self, invalidator, repository, acme):
        domains = await repository.find_domains_for_tenant(acme.id)
        for record in domains:
            record.domain = record.domain.upper()

        assert await invalidator.on_tenant_deleted(acme, domains) == [
            derive_cache_key("acme.test"),
            derive_cache_key("www.acme.test"),
        ]

    @pytest.mark.asyncio
    async def test_renamed_away_domain_stops_resolving_with_mixed_case_old_value(self, tenancy, repository):
        tenant = await tenancy.tenants.create_tenant(name="Acme")
        record = await tenancy.domains.create_domain(tenant.id, "acme.test")
        await tenancy.resolver.resolve("acme.test")

        record.domain = "other.test"
        await repository.update_domain(record)
        keys = await tenancy.invalidator.on_domain_changed(record, "ACME.test", tenant.id)

        assert derive_cache_key("acme.test") in keys
        with pytest.raises(TenantCouldNotBeIdentifiedError):
            await tenancy.resolver.resolve("acme.test")

    @pytest.mark.asyncio
    async def test_key_layout_follows_settings(self, repository, cache, acme):
        settings = ResolverSettings(caching_enabled=True, cache_key_prefix="tenancy", resolver_name="host")
        resolver = DomainTenantResolver(repository, cache, settings)
        invalidator = ResolverCacheInvalidator(repository, cache, settings)

        await resolver.resolve("acme.test")
        keys = await invalidator.on_tenant_updated(acme)

        assert resolver.get_cache_key("acme.test") in keys
        assert await cache.size() == 0


class TestInvalidationFailures:
    """Backend failures during invalidation are hard errors."""

    @pytest.mark.asyncio
    async def test_failed_delete_raises(self, repository, failing_cache, acme):
        invalidator = ResolverCacheInvalidator(repository, failing_cache)

        with pytest.raises(CacheInvalidationError) as exc_info:
            await invalidator.on_tenant_updated(acme)

        assert isinstance(exc_info.value, CacheError)
        assert set(exc_info.value.details["keys"]) == {
            derive_cache_key("acme.test"),
            derive_cache_key("www.acme.test"),
        }

    @pytest.mark.asyncio
    async def test_every_key_is_attempted_before_raising(self, repository, acme):
        cache = AsyncMock()
        cache.delete.side_effect = [CacheConnectionError("timeout"), True]
        invalidator = ResolverCacheInvalidator(repository, cache)

        with pytest.raises(CacheInvalidationError):
            await invalidator.on_tenant_updated(acme)

        assert cache.delete.await_count == 2

    @pytest.mark.asyncio
    async def test_tenant_update_surfaces_invalidation_failure(self, repository, failing_cache, acme):
        invalidator = ResolverCacheInvalidator(repository, failing_cache)
        service = TenantService(repository, invalidator)

        with pytest.raises(CacheInvalidationError):
            await service.update_tenant(acme.id, plan="pro")

    @pytest.mark.asyncio
    async def test_domain_delete_surfaces_invalidation_failure(self, repository, failing_cache, acme):
        invalidator = ResolverCacheInvalidator(repository, failing_cache)
        service = DomainService(repository, invalidator)

        with pytest.raises(CacheInvalidationError):
            await service.delete_domain(DomainId("domain-acme.test"))
