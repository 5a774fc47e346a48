"""Tenant repository implementation over the DatabaseRepository protocol.

Expected tables::

    {schema}.tenants (id text primary key, data jsonb, created_at timestamptz, updated_at timestamptz)
    {schema}.domains (id text primary key, domain text unique, tenant_id text references
                      {schema}.tenants(id) on delete cascade, created_at timestamptz, updated_at timestamptz)
"""

import json
import logging
from typing import Any, Dict, List, Optional

from ....core.exceptions import (
    DatabaseError,
    DomainAlreadyExistsError,
    DomainNotFoundError,
    TenantNotFoundError,
)
from ....core.value_objects import DomainId, TenantId
from ...database.protocols import DatabaseRepository
from ..entities.domain import Domain
from ..entities.tenant import Tenant

logger = logging.getLogger(__name__)


class TenantDatabaseRepository:
    """Database repository for tenants and their domains."""

    def __init__(self, database_repository: DatabaseRepository, schema: str = "admin"):
        """Initialize with a database repository.

        Args:
            database_repository: Database access implementation
            schema: Database schema name (default: admin)
        """
        self._db = database_repository
        self._schema = schema
        self._tenants = f"{schema}.tenants"
        self._domains = f"{schema}.domains"

    async def find_by_domain(self, domain: str) -> Optional[Tenant]:
        """Find the tenant owning ``domain``."""
        query = f"""
            SELECT t.* FROM {self._tenants} t
            JOIN {self._domains} d ON d.tenant_id = t.id
            WHERE d.domain = $1
        """
        row = await self._db.execute_fetchrow(query, domain)
        return self._map_row_to_tenant(row) if row else None

    async def save_tenant(self, tenant: Tenant) -> Tenant:
        """Insert a new tenant."""
        query = f"""
            INSERT INTO {self._tenants} (id, data, created_at, updated_at)
            VALUES ($1, $2, $3, $4)
            RETURNING *
        """
        row = await self._db.execute_fetchrow(
            query, tenant.id.value, json.dumps(tenant.data), tenant.created_at, tenant.updated_at
        )
        if not row:
            raise DatabaseError(f"Failed to create tenant {tenant.id}")

        logger.info(f"Created tenant {tenant.id}")
        return self._map_row_to_tenant(row)

    async def find_tenant(self, tenant_id: TenantId) -> Optional[Tenant]:
        """Find tenant by ID."""
        row = await self._db.execute_fetchrow(
            f"SELECT * FROM {self._tenants} WHERE id = $1", tenant_id.value
        )
        return self._map_row_to_tenant(row) if row else None

    async def update_tenant(self, tenant: Tenant) -> Tenant:
        """Persist tenant attribute changes."""
        query = f"""
            UPDATE {self._tenants} SET data = $2, updated_at = $3
            WHERE id = $1
            RETURNING *
        """
        row = await self._db.execute_fetchrow(
            query, tenant.id.value, json.dumps(tenant.data), tenant.updated_at
        )
        if not row:
            raise TenantNotFoundError(f"Tenant {tenant.id} not found")
        return self._map_row_to_tenant(row)

    async def delete_tenant(self, tenant_id: TenantId) -> bool:
        """Delete tenant; domains are removed by the cascading foreign key."""
        status = await self._db.execute_command(
            f"DELETE FROM {self._tenants} WHERE id = $1", tenant_id.value
        )
        return status.endswith(" 1")

    async def save_domain(self, domain: Domain) -> Domain:
        """Insert a new domain record."""
        if await self.find_domain_by_name(domain.domain):
            raise DomainAlreadyExistsError(f"Domain {domain.domain} is already registered")

        query = f"""
            INSERT INTO {self._domains} (id, domain, tenant_id, created_at, updated_at)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING *
        """
        row = await self._db.execute_fetchrow(
            query, domain.id.value, domain.domain, domain.tenant_id.value,
            domain.created_at, domain.updated_at,
        )
        if not row:
            raise DatabaseError(f"Failed to create domain {domain.domain}")
        return self._map_row_to_domain(row)

    async def find_domain(self, domain_id: DomainId) -> Optional[Domain]:
        """Find domain record by ID."""
        row = await self._db.execute_fetchrow(
            f"SELECT * FROM {self._domains} WHERE id = $1", domain_id.value
        )
        return self._map_row_to_domain(row) if row else None

    async def find_domain_by_name(self, domain: str) -> Optional[Domain]:
        """Find domain record by its domain value."""
        row = await self._db.execute_fetchrow(
            f"SELECT * FROM {self._domains} WHERE domain = $1", domain
        )
        return self._map_row_to_domain(row) if row else None

    async def find_domains_for_tenant(self, tenant_id: TenantId) -> List[Domain]:
        """Domains owned by a tenant, oldest first."""
        rows = await self._db.execute_query(
            f"SELECT * FROM {self._domains} WHERE tenant_id = $1 ORDER BY created_at, id",
            tenant_id.value,
        )
        return [self._map_row_to_domain(row) for row in rows]

    async def update_domain(self, domain: Domain) -> Domain:
        """Persist a renamed or re-pointed domain record."""
        existing = await self.find_domain_by_name(domain.domain)
        if existing and existing.id != domain.id:
            raise DomainAlreadyExistsError(f"Domain {domain.domain} is already registered")

        query = f"""
            UPDATE {self._domains} SET domain = $2, tenant_id = $3, updated_at = $4
            WHERE id = $1
            RETURNING *
        """
        row = await self._db.execute_fetchrow(
            query, domain.id.value, domain.domain, domain.tenant_id.value, domain.updated_at
        )
        if not row:
            raise DomainNotFoundError(f"Domain record {domain.id} not found")
        return self._map_row_to_domain(row)

    async def delete_domain(self, domain_id: DomainId) -> bool:
        """Delete a domain record."""
        status = await self._db.execute_command(
            f"DELETE FROM {self._domains} WHERE id = $1", domain_id.value
        )
        return status.endswith(" 1")

    def _map_row_to_tenant(self, row: Dict[str, Any]) -> Tenant:
        data = row.get("data") or {}
        if isinstance(data, str):
            data = json.loads(data)

        return Tenant(
            id=TenantId(row["id"]),
            data=data,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _map_row_to_domain(self, row: Dict[str, Any]) -> Domain:
        return Domain(
            id=DomainId(row["id"]),
            domain=row["domain"],
            tenant_id=TenantId(row["tenant_id"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
