"""Cache entities and protocols."""

from .protocols import CacheBackendAdapter, CacheBackendType
from .config import CacheBackendConfig

__all__ = ["CacheBackendAdapter", "CacheBackendType", "CacheBackendConfig"]
