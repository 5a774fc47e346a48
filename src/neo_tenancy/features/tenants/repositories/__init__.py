"""Tenant repository implementations."""

from .tenant_repository import TenantDatabaseRepository
from .memory_repository import InMemoryTenantRepository

__all__ = ["TenantDatabaseRepository", "InMemoryTenantRepository"]
