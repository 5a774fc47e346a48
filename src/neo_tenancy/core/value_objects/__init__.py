"""Value objects for neo-tenancy."""

from .identifiers import TenantId, DomainId

__all__ = ["TenantId", "DomainId"]
