"""Exception hierarchy for neo-tenancy."""

from .base import NeoTenancyError, create_error_response

from .domain import (
    ConfigurationError,
    TenantError,
    TenantNotFoundError,
    TenantCouldNotBeIdentifiedError,
    DomainError,
    DomainNotFoundError,
    DomainAlreadyExistsError,
    InvalidDomainError,
)

from .infrastructure import (
    CacheError,
    CacheConnectionError,
    CacheSerializationError,
    CacheInvalidationError,
    DatabaseError,
    StoreUnavailableError,
)

__all__ = [
    "NeoTenancyError",
    "create_error_response",

    "ConfigurationError",

    # Tenant / domain
    "TenantError",
    "TenantNotFoundError",
    "TenantCouldNotBeIdentifiedError",
    "DomainError",
    "DomainNotFoundError",
    "DomainAlreadyExistsError",
    "InvalidDomainError",

    # Infrastructure
    "CacheError",
    "CacheConnectionError",
    "CacheSerializationError",
    "CacheInvalidationError",
    "DatabaseError",
    "StoreUnavailableError",
]
