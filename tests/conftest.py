"""Pytest configuration and fixtures for neo-tenancy tests."""

import pytest

from neo_tenancy.config.settings import ResolverSettings
from neo_tenancy.features.cache.adapters.memory_adapter import MemoryAdapter
from neo_tenancy.features.cache.entities.config import CacheBackendConfig
from neo_tenancy.features.tenants.module import TenancyModule
from neo_tenancy.features.tenants.repositories.memory_repository import InMemoryTenantRepository


@pytest.fixture
def settings():
    """Resolver settings with caching enabled."""
    return ResolverSettings(caching_enabled=True)


@pytest.fixture
def repository():
    """In-memory tenant store with a query log."""
    return InMemoryTenantRepository()


@pytest.fixture
def cache():
    """Memory cache backend."""
    return MemoryAdapter(CacheBackendConfig(max_size=100))


@pytest.fixture
def tenancy(repository, settings, cache):
    """Resolver, invalidator and services sharing one cache."""
    return TenancyModule.create(repository, settings=settings, cache=cache)


@pytest.fixture
def lookups(repository):
    """Number of resolver store lookups recorded since the last flush."""
    def count() -> int:
        return len(repository.queries("find_by_domain"))
    return count
