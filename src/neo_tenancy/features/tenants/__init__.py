"""Tenants feature: cached domain resolution with invalidation on mutation."""

from .entities import Tenant, Domain, TenantStore, TenantRepository
from .resolvers import (
    DomainTenantResolver,
    ResolverCacheKeyBuilder,
    TenantSnapshotSerializer,
    derive_cache_key,
)
from .services import ResolverCacheInvalidator, TenantService, DomainService
from .repositories import TenantDatabaseRepository, InMemoryTenantRepository
from .module import TenancyModule

__all__ = [
    # Entities and protocols
    "Tenant",
    "Domain",
    "TenantStore",
    "TenantRepository",

    # Resolution
    "DomainTenantResolver",
    "ResolverCacheKeyBuilder",
    "TenantSnapshotSerializer",
    "derive_cache_key",

    # Services
    "ResolverCacheInvalidator",
    "TenantService",
    "DomainService",

    # Repositories
    "TenantDatabaseRepository",
    "InMemoryTenantRepository",

    "TenancyModule",
]
