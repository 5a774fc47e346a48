"""In-process memory cache backend."""

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from ..entities.config import CacheBackendConfig

logger = logging.getLogger(__name__)


@dataclass
class MemoryCacheEntry:
    """Memory cache entry with optional expiry."""
    value: bytes
    expires_at: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class MemoryAdapter:
    """Memory cache backend with TTL support and LRU bound.

    Only suitable for a single process: entries are not shared between
    workers, so invalidations issued elsewhere are not observed.
    """

    def __init__(
        self,
        config: Optional[CacheBackendConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or CacheBackendConfig()
        self._clock = clock
        self.max_size = self.config.max_size

        self._store: "OrderedDict[str, MemoryCacheEntry]" = OrderedDict()
        self._lock = asyncio.Lock()
        self._connected = False

    async def connect(self) -> None:
        """Initialize memory cache."""
        self._connected = True
        logger.info(f"Memory cache initialized with max_size={self.max_size}")

    async def disconnect(self) -> None:
        """Drop all entries."""
        async with self._lock:
            self._store.clear()
        self._connected = False

    async def get(self, key: str) -> Optional[bytes]:
        """Get value by key."""
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            if entry.is_expired(self._clock()):
                del self._store[key]
                return None

            self._store.move_to_end(key)
            return entry.value

    async def set(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        """Set key-value pair; ttl of None keeps the entry until deleted."""
        expires_at = self._clock() + ttl if ttl and ttl > 0 else None

        async with self._lock:
            self._store.pop(key, None)
            while len(self._store) >= self.max_size:
                evicted, _ = self._store.popitem(last=False)
                logger.debug(f"Evicted cache key {evicted}")

            self._store[key] = MemoryCacheEntry(value=value, expires_at=expires_at)

    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        async with self._lock:
            return self._store.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        """Check if key exists (and not expired)."""
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return False
            if entry.is_expired(self._clock()):
                del self._store[key]
                return False
            return True

    async def clear(self) -> None:
        """Clear all cache entries."""
        async with self._lock:
            self._store.clear()

    async def size(self) -> int:
        """Number of stored entries, expired ones included until touched."""
        async with self._lock:
            return len(self._store)

    async def health_check(self) -> bool:
        return True
