"""Configuration for neo-tenancy."""

from .settings import ResolverSettings, CACHE_FOREVER
from .logging_config import LoggingConfig, setup_logging

__all__ = [
    "ResolverSettings",
    "CACHE_FOREVER",
    "LoggingConfig",
    "setup_logging",
]
