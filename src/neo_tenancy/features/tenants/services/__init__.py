"""Tenant services module."""

from .cache_invalidator import ResolverCacheInvalidator
from .tenant_service import TenantService
from .domain_service import DomainService

__all__ = [
    "ResolverCacheInvalidator",
    "TenantService",
    "DomainService",
]
