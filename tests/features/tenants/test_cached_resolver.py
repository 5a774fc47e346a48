"""Tests for the cached domain resolver and its invalidation on mutation."""

from datetime import date

import pytest

from neo_tenancy.core.exceptions import TenantCouldNotBeIdentifiedError, TenantNotFoundError
from neo_tenancy.features.tenants.resolvers.cache_keys import derive_cache_key


async def create_tenant_with_domain(tenancy, domain="acme", **data):
    tenant = await tenancy.tenants.create_tenant(**data)
    await tenancy.domains.create_domain(tenant.id, domain)
    return tenant


class TestCachedResolution:
    """Cache-aside lookup behaviour."""

    @pytest.mark.asyncio
    async def test_tenants_can_be_resolved_using_the_cached_resolver(self, tenancy):
        tenant = await create_tenant_with_domain(tenancy, plan="pro")

        first = await tenancy.resolver.resolve("acme")
        second = await tenancy.resolver.resolve("acme")

        assert first.id == tenant.id
        assert second == first
        assert second.data == {"plan": "pro"}

    @pytest.mark.asyncio
    async def test_store_is_not_touched_on_a_cache_hit(self, tenancy, repository, lookups):
        tenant = await create_tenant_with_domain(tenancy)

        tenancy.settings.caching_enabled = False
        assert (await tenancy.resolver.resolve("acme")).id == tenant.id
        repository.flush_query_log()
        assert (await tenancy.resolver.resolve("acme")).id == tenant.id
        assert lookups() == 1

        tenancy.settings.caching_enabled = True
        assert (await tenancy.resolver.resolve("acme")).id == tenant.id
        repository.flush_query_log()
        assert (await tenancy.resolver.resolve("acme")).id == tenant.id
        assert lookups() == 0

    @pytest.mark.asyncio
    async def test_disabled_cache_neither_reads_nor_writes(self, tenancy, cache, lookups):
        await create_tenant_with_domain(tenancy)
        tenancy.settings.caching_enabled = False

        for _ in range(3):
            await tenancy.resolver.resolve("acme")

        assert lookups() == 3
        assert await cache.size() == 0

    @pytest.mark.asyncio
    async def test_results_are_identical_with_and_without_cache(self, tenancy):
        await create_tenant_with_domain(
            tenancy,
            name="Acme",
            regions=("eu", "us"),
            seat_limits={1: "starter", 10: "team"},
            tags={"beta"},
            trial_ends=date(2026, 1, 31),
        )
        await create_tenant_with_domain(tenancy, domain="globex.test", name="Globex")

        results = {}
        for enabled in (False, True, True):
            tenancy.settings.caching_enabled = enabled
            for domain in ("acme", "globex.test"):
                results.setdefault(domain, []).append(await tenancy.resolver.resolve(domain))

        for snapshots in results.values():
            assert all(snapshot == snapshots[0] for snapshot in snapshots)

    @pytest.mark.asyncio
    async def test_hit_returns_the_same_tenant_as_the_miss(self, tenancy, lookups):
        tenant = await create_tenant_with_domain(tenancy, name="Acme")
        await tenancy.tenants.update_tenant(tenant.id, regions=("eu", "us"), bundles={("eu", 2): 5})

        first = await tenancy.resolver.resolve("acme")
        second = await tenancy.resolver.resolve("acme")

        assert lookups() == 1
        assert second == first
        assert second.data["regions"] == ("eu", "us")
        assert second.data["bundles"] == {("eu", 2): 5}

    @pytest.mark.asyncio
    async def test_lookup_is_case_insensitive(self, tenancy, lookups):
        tenant = await create_tenant_with_domain(tenancy, domain="acme.test")

        assert (await tenancy.resolver.resolve("ACME.test")).id == tenant.id
        assert (await tenancy.resolver.resolve("acme.test.")).id == tenant.id
        assert lookups() == 1

    @pytest.mark.asyncio
    async def test_entries_are_written_without_expiry_by_default(self, tenancy, cache):
        await create_tenant_with_domain(tenancy)

        await tenancy.resolver.resolve("acme")

        entry = cache._store[derive_cache_key("acme")]
        assert entry.expires_at is None


class TestNegativeResults:
    """Not-found lookups are propagated and never cached."""

    @pytest.mark.asyncio
    async def test_unknown_domain_fails_on_cold_and_warm_cache(self, tenancy, cache, lookups):
        for _ in range(2):
            with pytest.raises(TenantCouldNotBeIdentifiedError) as exc_info:
                await tenancy.resolver.resolve("nobody.test")
            assert exc_info.value.domain == "nobody.test"

        assert lookups() == 2
        assert await cache.size() == 0

    @pytest.mark.asyncio
    async def test_not_found_is_a_tenant_not_found_error(self, tenancy):
        with pytest.raises(TenantNotFoundError):
            await tenancy.resolver.resolve("nobody.test")

    @pytest.mark.asyncio
    async def test_domain_created_after_a_miss_resolves_immediately(self, tenancy):
        with pytest.raises(TenantCouldNotBeIdentifiedError):
            await tenancy.resolver.resolve("late.test")

        tenant = await create_tenant_with_domain(tenancy, domain="late.test")

        assert (await tenancy.resolver.resolve("late.test")).id == tenant.id


class TestInvalidationOnMutation:
    """Mutations performed through the services clear stale entries."""

    @pytest.mark.asyncio
    async def test_cache_is_invalidated_when_the_tenant_is_updated(self, tenancy, repository, lookups):
        tenant = await create_tenant_with_domain(tenancy)

        await tenancy.resolver.resolve("acme")
        repository.flush_query_log()
        await tenancy.resolver.resolve("acme")
        assert lookups() == 0

        await tenancy.tenants.update_tenant(tenant.id, foo="bar")

        repository.flush_query_log()
        resolved = await tenancy.resolver.resolve("acme")
        assert lookups() == 1
        assert resolved.data == {"foo": "bar"}

    @pytest.mark.asyncio
    async def test_update_invalidates_every_domain_of_the_tenant(self, tenancy, repository, lookups):
        tenant = await create_tenant_with_domain(tenancy)
        await tenancy.domains.create_domain(tenant.id, "acme.example.com")

        await tenancy.resolver.resolve("acme")
        await tenancy.resolver.resolve("acme.example.com")

        await tenancy.tenants.update_tenant(tenant.id, plan="enterprise")

        repository.flush_query_log()
        assert (await tenancy.resolver.resolve("acme")).data["plan"] == "enterprise"
        assert (await tenancy.resolver.resolve("acme.example.com")).data["plan"] == "enterprise"
        assert lookups() == 2

    @pytest.mark.asyncio
    async def test_cache_is_invalidated_when_the_tenant_is_deleted(self, tenancy, repository, lookups):
        tenant = await create_tenant_with_domain(tenancy)

        await tenancy.resolver.resolve("acme")
        repository.flush_query_log()
        await tenancy.resolver.resolve("acme")
        assert lookups() == 0

        await tenancy.tenants.delete_tenant(tenant.id)
        repository.flush_query_log()

        with pytest.raises(TenantCouldNotBeIdentifiedError):
            await tenancy.resolver.resolve("acme")

        assert lookups() == 1

    @pytest.mark.asyncio
    async def test_cache_is_invalidated_when_a_tenants_domain_is_changed(self, tenancy, repository, lookups):
        tenant = await create_tenant_with_domain(tenancy)

        await tenancy.resolver.resolve("acme")
        repository.flush_query_log()
        await tenancy.resolver.resolve("acme")
        assert lookups() == 0

        await tenancy.domains.create_domain(tenant.id, "bar")

        repository.flush_query_log()
        assert (await tenancy.resolver.resolve("acme")).id == tenant.id
        assert lookups() == 1

        repository.flush_query_log()
        assert (await tenancy.resolver.resolve("bar")).id == tenant.id
        assert lookups() == 1

    @pytest.mark.asyncio
    async def test_cache_is_invalidated_when_a_tenants_domain_is_deleted(self, tenancy, repository, lookups):
        tenant = await create_tenant_with_domain(tenancy)

        await tenancy.resolver.resolve("acme")
        repository.flush_query_log()
        await tenancy.resolver.resolve("acme")
        assert lookups() == 0

        domain = await tenancy.domains.primary_domain(tenant.id)
        await tenancy.domains.delete_domain(domain.id)
        repository.flush_query_log()

        with pytest.raises(TenantCouldNotBeIdentifiedError):
            await tenancy.resolver.resolve("acme")

        assert lookups() == 1

    @pytest.mark.asyncio
    async def test_renamed_domain_stops_resolving_under_old_value(self, tenancy):
        tenant = await create_tenant_with_domain(tenancy)
        await tenancy.resolver.resolve("acme")

        domain = await tenancy.domains.primary_domain(tenant.id)
        await tenancy.domains.update_domain(domain.id, domain="acme-renamed")

        with pytest.raises(TenantCouldNotBeIdentifiedError):
            await tenancy.resolver.resolve("acme")
        assert (await tenancy.resolver.resolve("acme-renamed")).id == tenant.id

    @pytest.mark.asyncio
    async def test_domain_moved_to_another_tenant_resolves_to_new_owner(self, tenancy):
        old_owner = await create_tenant_with_domain(tenancy)
        new_owner = await tenancy.tenants.create_tenant(name="Globex")

        assert (await tenancy.resolver.resolve("acme")).id == old_owner.id

        domain = await tenancy.domains.primary_domain(old_owner.id)
        await tenancy.domains.update_domain(domain.id, tenant_id=new_owner.id)

        assert (await tenancy.resolver.resolve("acme")).id == new_owner.id

    @pytest.mark.asyncio
    async def test_entries_written_while_enabled_are_invalidated_while_disabled(self, tenancy, repository, lookups):
        tenant = await create_tenant_with_domain(tenancy)
        await tenancy.resolver.resolve("acme")

        tenancy.settings.caching_enabled = False
        await tenancy.tenants.update_tenant(tenant.id, foo="baz")
        tenancy.settings.caching_enabled = True

        repository.flush_query_log()
        assert (await tenancy.resolver.resolve("acme")).data == {"foo": "baz"}
        assert lookups() == 1
