"""Domain service for registering, changing and removing tenant domains."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from ....core.exceptions import DomainNotFoundError, TenantNotFoundError
from ....core.value_objects import DomainId, TenantId
from ..entities.domain import Domain
from ..entities.protocols import TenantRepository
from ..utils.validation import DomainValidationRules
from .cache_invalidator import ResolverCacheInvalidator

logger = logging.getLogger(__name__)


class DomainService:
    """Service for domain record lifecycle operations."""

    def __init__(self, repository: TenantRepository, invalidator: ResolverCacheInvalidator):
        self._repository = repository
        self._invalidator = invalidator

    async def create_domain(self, tenant_id: TenantId, domain: str) -> Domain:
        """Register a domain for a tenant."""
        normalized = DomainValidationRules.validate(domain)

        try:
            if await self._repository.find_tenant(tenant_id) is None:
                raise TenantNotFoundError(f"Tenant {tenant_id} not found")

            record = await self._repository.save_domain(
                Domain(id=DomainId.generate(), domain=normalized, tenant_id=tenant_id)
            )
            await self._invalidator.on_domain_created(record)

            logger.info(f"Registered domain {normalized} for tenant {tenant_id}")
            return record

        except Exception as e:
            logger.error(f"Failed to register domain {normalized} for tenant {tenant_id}: {e}")
            raise

    async def get_domain(self, domain_id: DomainId) -> Domain:
        """Get domain record by ID."""
        record = await self._repository.find_domain(domain_id)
        if record is None:
            raise DomainNotFoundError(f"Domain record {domain_id} not found")
        return record

    async def list_domains(self, tenant_id: TenantId) -> List[Domain]:
        """Domains of a tenant, oldest first."""
        return await self._repository.find_domains_for_tenant(tenant_id)

    async def primary_domain(self, tenant_id: TenantId) -> Optional[Domain]:
        """The tenant's first registered domain."""
        domains = await self.list_domains(tenant_id)
        return domains[0] if domains else None

    async def update_domain(
        self,
        domain_id: DomainId,
        domain: Optional[str] = None,
        tenant_id: Optional[TenantId] = None,
    ) -> Domain:
        """Rename a domain and/or move it to another tenant."""
        try:
            record = await self.get_domain(domain_id)
            old_domain = record.domain
            old_tenant_id = record.tenant_id

            if domain is not None:
                record.domain = DomainValidationRules.validate(domain)
            if tenant_id is not None:
                if await self._repository.find_tenant(tenant_id) is None:
                    raise TenantNotFoundError(f"Tenant {tenant_id} not found")
                record.tenant_id = tenant_id

            if record.domain == old_domain and record.tenant_id == old_tenant_id:
                return record

            record.updated_at = datetime.now(timezone.utc)
            updated = await self._repository.update_domain(record)
            await self._invalidator.on_domain_changed(updated, old_domain, old_tenant_id)

            logger.info(f"Updated domain {old_domain} -> {updated.domain} (tenant {updated.tenant_id})")
            return updated

        except Exception as e:
            logger.error(f"Failed to update domain record {domain_id}: {e}")
            raise

    async def delete_domain(self, domain_id: DomainId) -> None:
        """Remove a domain record."""
        try:
            record = await self.get_domain(domain_id)

            await self._repository.delete_domain(domain_id)
            await self._invalidator.on_domain_deleted(record)

            logger.info(f"Deleted domain {record.domain} of tenant {record.tenant_id}")

        except Exception as e:
            logger.error(f"Failed to delete domain record {domain_id}: {e}")
            raise
