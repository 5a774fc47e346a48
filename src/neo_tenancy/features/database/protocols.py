"""Database protocols used by repositories."""

from abc import abstractmethod
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class DatabaseRepository(Protocol):
    """Base protocol for database access used by repositories."""

    @abstractmethod
    async def execute_query(self, query: str, *args: Any) -> List[Dict[str, Any]]:
        """Execute a query and return all rows."""
        ...

    @abstractmethod
    async def execute_fetchrow(self, query: str, *args: Any) -> Optional[Dict[str, Any]]:
        """Execute a query and return a single row."""
        ...

    @abstractmethod
    async def execute_command(self, command: str, *args: Any) -> str:
        """Execute a command and return its status string."""
        ...
