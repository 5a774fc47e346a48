"""Infrastructure exceptions for cache and storage backends."""

from .base import NeoTenancyError


class CacheError(NeoTenancyError):
    """Base class for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """Raised when the cache backend is unavailable."""
    pass


class CacheSerializationError(CacheError):
    """Raised when a cached value cannot be encoded or decoded."""
    pass


class CacheInvalidationError(CacheError):
    """Raised when stale entries could not be removed after a mutation."""
    pass


class DatabaseError(NeoTenancyError):
    """Base class for storage errors."""
    pass


class StoreUnavailableError(DatabaseError):
    """Raised when the tenant store cannot be reached."""
    pass
