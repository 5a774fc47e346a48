"""Neo-Tenancy - cached domain to tenant resolution for NeoMultiTenant services.

Resolves a request domain to its tenant through a cache-aside layer that is
invalidated whenever a tenant or one of its domains changes.
"""

from .__version__ import __version__

from .config import ResolverSettings, CACHE_FOREVER, setup_logging

from .core.exceptions import (
    NeoTenancyError,
    TenantNotFoundError,
    TenantCouldNotBeIdentifiedError,
    DomainAlreadyExistsError,
    CacheError,
    CacheInvalidationError,
    DatabaseError,
    StoreUnavailableError,
)

from .core.value_objects import TenantId, DomainId

from .features.cache import MemoryAdapter, RedisAdapter, create_cache_backend
from .features.database import AsyncpgDatabase

from .features.tenants import (
    Tenant,
    Domain,
    DomainTenantResolver,
    ResolverCacheInvalidator,
    TenantService,
    DomainService,
    TenantDatabaseRepository,
    InMemoryTenantRepository,
    TenancyModule,
)

__all__ = [
    "__version__",

    "ResolverSettings",
    "CACHE_FOREVER",
    "setup_logging",

    "NeoTenancyError",
    "TenantNotFoundError",
    "TenantCouldNotBeIdentifiedError",
    "DomainAlreadyExistsError",
    "CacheError",
    "CacheInvalidationError",
    "DatabaseError",
    "StoreUnavailableError",

    "TenantId",
    "DomainId",

    "MemoryAdapter",
    "RedisAdapter",
    "create_cache_backend",
    "AsyncpgDatabase",

    "Tenant",
    "Domain",
    "DomainTenantResolver",
    "ResolverCacheInvalidator",
    "TenantService",
    "DomainService",
    "TenantDatabaseRepository",
    "InMemoryTenantRepository",
    "TenancyModule",
]
