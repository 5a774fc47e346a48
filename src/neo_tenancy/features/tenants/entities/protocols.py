"""Protocol interfaces for tenant storage.

The resolver only needs ``find_by_domain``; the mutation surface is used
by the tenant and domain services, which run invalidation after each
successful write.
"""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from ....core.value_objects import DomainId, TenantId
from .domain import Domain
from .tenant import Tenant


@runtime_checkable
class TenantStore(Protocol):
    """Uncached tenant lookup by identifying domain."""

    @abstractmethod
    async def find_by_domain(self, domain: str) -> Optional[Tenant]:
        """Find the tenant owning ``domain``."""
        ...


@runtime_checkable
class TenantRepository(TenantStore, Protocol):
    """Protocol for tenant and domain persistence operations."""

    @abstractmethod
    async def save_tenant(self, tenant: Tenant) -> Tenant:
        """Insert a new tenant."""
        ...

    @abstractmethod
    async def find_tenant(self, tenant_id: TenantId) -> Optional[Tenant]:
        """Find tenant by ID."""
        ...

    @abstractmethod
    async def update_tenant(self, tenant: Tenant) -> Tenant:
        """Persist tenant attribute changes."""
        ...

    @abstractmethod
    async def delete_tenant(self, tenant_id: TenantId) -> bool:
        """Delete tenant and its domains."""
        ...

    @abstractmethod
    async def save_domain(self, domain: Domain) -> Domain:
        """Insert a new domain record."""
        ...

    @abstractmethod
    async def find_domain(self, domain_id: DomainId) -> Optional[Domain]:
        """Find domain record by ID."""
        ...

    @abstractmethod
    async def find_domain_by_name(self, domain: str) -> Optional[Domain]:
        """Find domain record by its domain value."""
        ...

    @abstractmethod
    async def find_domains_for_tenant(self, tenant_id: TenantId) -> List[Domain]:
        """Domains owned by a tenant, oldest first."""
        ...

    @abstractmethod
    async def update_domain(self, domain: Domain) -> Domain:
        """Persist a renamed or re-pointed domain record."""
        ...

    @abstractmethod
    async def delete_domain(self, domain_id: DomainId) -> bool:
        """Delete a domain record."""
        ...
