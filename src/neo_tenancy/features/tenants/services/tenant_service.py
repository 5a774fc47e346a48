"""Tenant service.

Performs tenant mutations and runs resolver cache invalidation in the same
call, so a returned update or delete is already visible to the resolver.
"""

import logging
from typing import Any, Optional

from ....core.exceptions import TenantNotFoundError
from ....core.value_objects import TenantId
from ..entities.protocols import TenantRepository
from ..entities.tenant import Tenant
from .cache_invalidator import ResolverCacheInvalidator

logger = logging.getLogger(__name__)


class TenantService:
    """Service for tenant lifecycle operations."""

    def __init__(self, repository: TenantRepository, invalidator: ResolverCacheInvalidator):
        """Initialize with injected dependencies.

        Args:
            repository: Tenant repository implementation
            invalidator: Resolver cache invalidation hooks
        """
        self._repository = repository
        self._invalidator = invalidator

    async def create_tenant(self, tenant_id: Optional[TenantId] = None, **data: Any) -> Tenant:
        """Create new tenant.

        A tenant without domains cannot be resolved, so nothing is cached yet.
        """
        tenant = Tenant(id=tenant_id or TenantId.generate(), data=data)
        saved_tenant = await self._repository.save_tenant(tenant)

        logger.info(f"Created tenant {saved_tenant.id}")
        return saved_tenant

    async def get_tenant(self, tenant_id: TenantId) -> Tenant:
        """Get tenant by ID."""
        tenant = await self._repository.find_tenant(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(f"Tenant {tenant_id} not found")
        return tenant

    async def update_tenant(self, tenant_id: TenantId, **attributes: Any) -> Tenant:
        """Update tenant attributes and invalidate its cached lookups."""
        try:
            tenant = await self.get_tenant(tenant_id)
            tenant.update(**attributes)

            updated_tenant = await self._repository.update_tenant(tenant)
            await self._invalidator.on_tenant_updated(updated_tenant)

            logger.info(f"Updated tenant {tenant_id}")
            return updated_tenant

        except Exception as e:
            logger.error(f"Failed to update tenant {tenant_id}: {e}")
            raise

    async def delete_tenant(self, tenant_id: TenantId) -> None:
        """Delete tenant with its domains and invalidate their cached lookups."""
        try:
            tenant = await self.get_tenant(tenant_id)
            domains = await self._repository.find_domains_for_tenant(tenant_id)

            await self._repository.delete_tenant(tenant_id)
            await self._invalidator.on_tenant_deleted(tenant, domains)

            logger.info(f"Deleted tenant {tenant_id} and {len(domains)} domains")

        except Exception as e:
            logger.error(f"Failed to delete tenant {tenant_id}: {e}")
            raise
