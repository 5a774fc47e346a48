"""Domain exceptions for tenant and domain records."""

from typing import Optional

from .base import NeoTenancyError


class ConfigurationError(NeoTenancyError):
    """Raised when resolver or backend configuration is invalid."""
    pass


# Tenant Errors
class TenantError(NeoTenancyError):
    """Base class for tenant-related errors."""
    pass


class TenantNotFoundError(TenantError):
    """Raised when tenant is not found."""
    pass


class TenantCouldNotBeIdentifiedError(TenantNotFoundError):
    """Raised when no tenant owns the requested domain."""

    def __init__(self, domain: str, message: Optional[str] = None):
        super().__init__(
            message or f"Tenant could not be identified on domain {domain}",
            details={"domain": domain},
        )
        self.domain = domain


# Domain Errors
class DomainError(NeoTenancyError):
    """Base class for domain record errors."""
    pass


class DomainNotFoundError(DomainError):
    """Raised when a domain record does not exist."""
    pass


class DomainAlreadyExistsError(DomainError):
    """Raised when a domain is already registered to a tenant."""
    pass


class InvalidDomainError(DomainError):
    """Raised when a domain string fails validation."""
    pass
