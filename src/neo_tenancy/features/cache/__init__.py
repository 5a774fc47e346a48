"""Cache feature: backend protocol, adapters and factory."""

from .entities import CacheBackendAdapter, CacheBackendType, CacheBackendConfig
from .adapters import MemoryAdapter, RedisAdapter
from .factory import create_cache_backend

__all__ = [
    "CacheBackendAdapter",
    "CacheBackendType",
    "CacheBackendConfig",
    "MemoryAdapter",
    "RedisAdapter",
    "create_cache_backend",
]
