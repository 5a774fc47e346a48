"""In-process tenant repository.

Stores copies of entities so callers never share state with the store,
and records every operation in ``query_log`` the way a database query log
would. Useful for local development and for asserting how often the
resolver reaches storage.
"""

import copy
import logging
from typing import Dict, List, Optional, Tuple

from ....core.exceptions import (
    DomainAlreadyExistsError,
    DomainNotFoundError,
    TenantNotFoundError,
)
from ....core.value_objects import DomainId, TenantId
from ..entities.domain import Domain
from ..entities.tenant import Tenant

logger = logging.getLogger(__name__)


class InMemoryTenantRepository:
    """Dict-backed tenant and domain repository with a query log."""

    def __init__(self):
        self._tenants: Dict[TenantId, Tenant] = {}
        self._domains: Dict[DomainId, Domain] = {}
        self.query_log: List[Tuple[str, str]] = []

    def flush_query_log(self) -> None:
        """Forget previously recorded queries."""
        self.query_log.clear()

    def queries(self, operation: Optional[str] = None) -> List[Tuple[str, str]]:
        """Recorded queries, optionally filtered by operation name."""
        if operation is None:
            return list(self.query_log)
        return [entry for entry in self.query_log if entry[0] == operation]

    def _log(self, operation: str, argument: str) -> None:
        self.query_log.append((operation, argument))

    async def find_by_domain(self, domain: str) -> Optional[Tenant]:
        self._log("find_by_domain", domain)

        for record in self._domains.values():
            if record.domain == domain:
                tenant = self._tenants.get(record.tenant_id)
                return copy.deepcopy(tenant) if tenant else None
        return None

    async def save_tenant(self, tenant: Tenant) -> Tenant:
        self._log("save_tenant", tenant.id.value)
        self._tenants[tenant.id] = copy.deepcopy(tenant)
        return copy.deepcopy(tenant)

    async def find_tenant(self, tenant_id: TenantId) -> Optional[Tenant]:
        self._log("find_tenant", tenant_id.value)
        tenant = self._tenants.get(tenant_id)
        return copy.deepcopy(tenant) if tenant else None

    async def update_tenant(self, tenant: Tenant) -> Tenant:
        self._log("update_tenant", tenant.id.value)
        if tenant.id not in self._tenants:
            raise TenantNotFoundError(f"Tenant {tenant.id} not found")
        self._tenants[tenant.id] = copy.deepcopy(tenant)
        return copy.deepcopy(tenant)

    async def delete_tenant(self, tenant_id: TenantId) -> bool:
        self._log("delete_tenant", tenant_id.value)
        if self._tenants.pop(tenant_id, None) is None:
            return False

        owned = [domain_id for domain_id, record in self._domains.items() if record.tenant_id == tenant_id]
        for domain_id in owned:
            del self._domains[domain_id]
        return True

    async def save_domain(self, domain: Domain) -> Domain:
        self._log("save_domain", domain.domain)
        if domain.tenant_id not in self._tenants:
            raise TenantNotFoundError(f"Tenant {domain.tenant_id} not found")
        if self._lookup_domain(domain.domain):
            raise DomainAlreadyExistsError(f"Domain {domain.domain} is already registered")

        self._domains[domain.id] = copy.deepcopy(domain)
        return copy.deepcopy(domain)

    async def find_domain(self, domain_id: DomainId) -> Optional[Domain]:
        self._log("find_domain", domain_id.value)
        record = self._domains.get(domain_id)
        return copy.deepcopy(record) if record else None

    async def find_domain_by_name(self, domain: str) -> Optional[Domain]:
        self._log("find_domain_by_name", domain)
        record = self._lookup_domain(domain)
        return copy.deepcopy(record) if record else None

    async def find_domains_for_tenant(self, tenant_id: TenantId) -> List[Domain]:
        self._log("find_domains_for_tenant", tenant_id.value)
        owned = [record for record in self._domains.values() if record.tenant_id == tenant_id]
        owned.sort(key=lambda record: record.created_at)  # stable: ties keep insertion order
        return copy.deepcopy(owned)

    async def update_domain(self, domain: Domain) -> Domain:
        self._log("update_domain", domain.domain)
        if domain.id not in self._domains:
            raise DomainNotFoundError(f"Domain record {domain.id} not found")
        if domain.tenant_id not in self._tenants:
            raise TenantNotFoundError(f"Tenant {domain.tenant_id} not found")

        existing = self._lookup_domain(domain.domain)
        if existing and existing.id != domain.id:
            raise DomainAlreadyExistsError(f"Domain {domain.domain} is already registered")

        self._domains[domain.id] = copy.deepcopy(domain)
        return copy.deepcopy(domain)

    async def delete_domain(self, domain_id: DomainId) -> bool:
        self._log("delete_domain", domain_id.value)
        return self._domains.pop(domain_id, None) is not None

    def _lookup_domain(self, domain: str) -> Optional[Domain]:
        for record in self._domains.values():
            if record.domain == domain:
                return record
        return None
