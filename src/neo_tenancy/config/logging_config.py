"""Logging configuration for applications embedding neo-tenancy.

The library itself only creates module loggers under ``neo_tenancy``;
``setup_logging()`` is for the host application to call once at startup.
Output is tuned through environment variables:

    LOG_VERBOSITY  QUIET | NORMAL | VERBOSE | DEBUG   (default NORMAL)
    LOG_LEVEL      explicit level, overrides LOG_VERBOSITY
    LOG_FORMAT     simple | detailed | json          (default simple)

Resolver cache hits and misses are logged at DEBUG, so ``LOG_VERBOSITY=DEBUG``
shows every lookup.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"
    NORMAL = "NORMAL"
    VERBOSE = "VERBOSE"
    DEBUG = "DEBUG"


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

VERBOSITY_LEVELS = {
    LogVerbosity.QUIET: "ERROR",
    LogVerbosity.NORMAL: "WARNING",
    LogVerbosity.VERBOSE: "INFO",
    LogVerbosity.DEBUG: "DEBUG",
}

FORMATS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map a verbosity mode to a log level; unknown modes mean NORMAL."""
    try:
        return VERBOSITY_LEVELS[LogVerbosity(verbosity.upper())]
    except ValueError:
        return VERBOSITY_LEVELS[LogVerbosity.NORMAL]


class LoggingConfig:
    """Builds and applies the dictConfig for neo-tenancy."""

    # Driver loggers are noisy below ERROR
    QUIET_LIBRARIES = ("asyncio", "asyncpg", "redis")

    @classmethod
    def build(cls) -> Dict[str, Any]:
        """dictConfig mapping for the current environment."""
        # An unrecognised LOG_LEVEL falls back to LOG_VERBOSITY
        explicit_level = os.getenv("LOG_LEVEL", "").strip().upper()
        if explicit_level in LOG_LEVELS:
            level = explicit_level
        else:
            level = get_log_level_from_verbosity(os.getenv("LOG_VERBOSITY", LogVerbosity.NORMAL.value))

        try:
            log_format = LogFormat(os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value).lower())
        except ValueError:
            log_format = LogFormat.SIMPLE

        console = {"level": "ERROR", "handlers": ["console"], "propagate": False}
        loggers = {name: dict(console) for name in cls.QUIET_LIBRARIES}
        loggers["neo_tenancy"] = dict(console, level=level)

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": FORMATS[log_format], "datefmt": "%Y-%m-%d %H:%M:%S"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": loggers,
        }

    @classmethod
    def configure(cls) -> None:
        """Apply the configuration built from the environment."""
        config = cls.build()
        logging.config.dictConfig(config)
        logging.getLogger(__name__).debug(
            f"Logging configured: level={config['loggers']['neo_tenancy']['level']}"
        )


def setup_logging() -> None:
    """Configure neo-tenancy logging from environment variables."""
    LoggingConfig.configure()
