"""Cache protocols for neo-tenancy.

The resolver treats the cache backend as a single logical key-value store
with atomic per-key get, set and delete. Values are opaque bytes.
"""

from abc import abstractmethod
from enum import Enum
from typing import Optional, Protocol, runtime_checkable


class CacheBackendType(str, Enum):
    """Supported cache backend types."""
    MEMORY = "memory"
    REDIS = "redis"


@runtime_checkable
class CacheBackendAdapter(Protocol):
    """Protocol for cache backend adapters."""

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the cache backend."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect from the cache backend."""
        ...

    @abstractmethod
    async def get(self, key: str) -> Optional[bytes]:
        """Get value by key, None when absent or expired."""
        ...

    @abstractmethod
    async def set(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        """Store value; ttl of None keeps the entry until deleted."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if key exists."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check backend health."""
        ...
