"""Cache backend factory."""

import logging
from typing import Any

from .adapters import MemoryAdapter, RedisAdapter
from .entities.config import CacheBackendConfig
from .entities.protocols import CacheBackendAdapter, CacheBackendType
from ...core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def create_cache_backend(settings: Any) -> CacheBackendAdapter:
    """Create the cache backend selected by resolver settings.

    Args:
        settings: ResolverSettings (or anything exposing the same fields)

    Returns:
        An unconnected cache backend adapter
    """
    config = CacheBackendConfig.from_settings(settings)

    if config.backend_type == CacheBackendType.MEMORY:
        backend = MemoryAdapter(config)
    elif config.backend_type == CacheBackendType.REDIS:
        backend = RedisAdapter(config)
    else:
        raise ConfigurationError(f"Unsupported cache backend: {config.backend_type}")

    logger.info(f"Created {config.backend_type.value} cache backend")
    return backend
