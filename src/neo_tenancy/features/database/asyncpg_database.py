"""asyncpg implementation of the DatabaseRepository protocol."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import asyncpg

from ...core.exceptions import DatabaseError, StoreUnavailableError

logger = logging.getLogger(__name__)

# Errors meaning the store itself is unreachable rather than the query being wrong.
UNAVAILABLE_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    asyncpg.exceptions.CannotConnectNowError,
    asyncpg.exceptions.ConnectionDoesNotExistError,
    asyncpg.exceptions.TooManyConnectionsError,
    asyncpg.exceptions.InterfaceError,
)


class AsyncpgDatabase:
    """Database access over a lazily created asyncpg pool."""

    def __init__(
        self,
        dsn: str,
        min_size: int = 1,
        max_size: int = 10,
        timeout: float = 10.0,
    ):
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._timeout = timeout
        self._pool: Optional[asyncpg.Pool] = None
        self._lock = asyncio.Lock()

    async def _ensure_pool(self) -> asyncpg.Pool:
        """Ensure the pool is created and available."""
        if self._pool is None:
            async with self._lock:
                if self._pool is None:
                    try:
                        self._pool = await asyncpg.create_pool(
                            dsn=self._dsn,
                            min_size=self._min_size,
                            max_size=self._max_size,
                            timeout=self._timeout,
                        )
                    except UNAVAILABLE_ERRORS as e:
                        logger.error(f"Failed to create tenant store pool: {e}")
                        raise StoreUnavailableError(f"Failed to connect to tenant store: {e}")
                    logger.info(f"Created tenant store pool: min={self._min_size}, max={self._max_size}")
        return self._pool

    async def close(self) -> None:
        """Close the connection pool."""
        if self._pool:
            async with self._lock:
                if self._pool:
                    await self._pool.close()
                    self._pool = None
                    logger.info("Closed tenant store pool")

    async def execute_query(self, query: str, *args: Any) -> List[Dict[str, Any]]:
        pool = await self._ensure_pool()
        try:
            rows = await pool.fetch(query, *args, timeout=self._timeout)
        except UNAVAILABLE_ERRORS as e:
            raise StoreUnavailableError(f"Tenant store unavailable: {e}")
        except asyncpg.PostgresError as e:
            raise DatabaseError(f"Query failed: {e}")
        return [dict(row) for row in rows]

    async def execute_fetchrow(self, query: str, *args: Any) -> Optional[Dict[str, Any]]:
        pool = await self._ensure_pool()
        try:
            row = await pool.fetchrow(query, *args, timeout=self._timeout)
        except UNAVAILABLE_ERRORS as e:
            raise StoreUnavailableError(f"Tenant store unavailable: {e}")
        except asyncpg.PostgresError as e:
            raise DatabaseError(f"Query failed: {e}")
        return dict(row) if row is not None else None

    async def execute_command(self, command: str, *args: Any) -> str:
        pool = await self._ensure_pool()
        try:
            return await pool.execute(command, *args, timeout=self._timeout)
        except UNAVAILABLE_ERRORS as e:
            raise StoreUnavailableError(f"Tenant store unavailable: {e}")
        except asyncpg.PostgresError as e:
            raise DatabaseError(f"Command failed: {e}")
