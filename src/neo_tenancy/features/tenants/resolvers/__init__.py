"""Tenant resolvers."""

from .cache_keys import ResolverCacheKeyBuilder, derive_cache_key
from .serializer import TenantSnapshotSerializer
from .domain_resolver import DomainTenantResolver

__all__ = [
    "ResolverCacheKeyBuilder",
    "derive_cache_key",
    "TenantSnapshotSerializer",
    "DomainTenantResolver",
]
