"""Database access for tenant storage."""

from .protocols import DatabaseRepository
from .asyncpg_database import AsyncpgDatabase

__all__ = ["DatabaseRepository", "AsyncpgDatabase"]
