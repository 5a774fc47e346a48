"""Tenant entities and protocols."""

from .tenant import Tenant
from .domain import Domain
from .protocols import TenantStore, TenantRepository

__all__ = ["Tenant", "Domain", "TenantStore", "TenantRepository"]
