"""Lifecycle of the single shared SQL Server connection handle."""

import asyncio
import logging
from typing import Any, Optional, Sequence

from core.config import DatabaseConfig
from core.exceptions import DatabaseConnectionError
from database.connectors import AsyncMSSQLConnector, QueryResult, create_database_connector

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Owns one lazily-created connection pool shared by every tool call.

    - ensure_connected() is idempotent and cheap once connected
    - concurrent first callers create exactly one pool
    - a failed attempt caches nothing, so the next call retries from scratch
    - nothing is retried or reconnected automatically
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._connector: Optional[AsyncMSSQLConnector] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._connector is not None and self._connector.is_open

    async def ensure_connected(self) -> AsyncMSSQLConnector:
        """
        Open the shared connection handle if it does not exist yet.

        Returns:
            The live connector

        Raises:
            DatabaseConnectionError: If the handle cannot be established
        """
        if self._connector is not None:
            return self._connector

        async with self._lock:
            if self._connector is None:
                logger.info(f"Connecting to SQL Server {self.config.server}/{self.config.database}")
                connector = create_database_connector(self.config)
                await connector.initialize_pool()
                self._connector = connector
                logger.info("✅ Connected to SQL Server")

        return self._connector

    async def execute_query(self, query: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        """
        Execute one statement on the shared handle.

        Args:
            query: SQL statement
            params: Optional bound parameter values

        Returns:
            QueryResult with rows, columns and affected counts
        """
        if self._connector is None:
            raise DatabaseConnectionError("No database connection")
        return await self._connector.execute_query(query, params)

    async def shutdown(self):
        """Close the shared handle, if any. Safe to call repeatedly."""
        async with self._lock:
            connector, self._connector = self._connector, None

        if connector is not None:
            await connector.close()
            logger.info("ConnectionManager shut down")
