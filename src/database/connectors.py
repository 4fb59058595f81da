"""Async SQL Server connector with connection pooling."""

import logging
import struct
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

try:
    import aioodbc
except ImportError:
    aioodbc = None

from pydantic import BaseModel, Field

from core.config import DatabaseConfig
from core.exceptions import DatabaseConnectionError, QueryExecutionError

logger = logging.getLogger(__name__)

PROBE_QUERY = "SELECT 1"

# ODBC SQL types pyodbc cannot fetch without an output converter
SQL_SS_VARIANT = -150
SQL_SS_TIMESTAMPOFFSET = -155


def decode_datetimeoffset(value: Optional[bytes]) -> Optional[datetime]:
    """Decode a SQL_SS_TIMESTAMPOFFSET_STRUCT into an aware datetime."""
    if value is None:
        return None
    year, month, day, hour, minute, second, fraction, tz_hour, tz_minute = struct.unpack("<6hI2h", value)
    return datetime(
        year, month, day, hour, minute, second, fraction // 1000,
        timezone(timedelta(hours=tz_hour, minutes=tz_minute))
    )


def decode_sql_variant(value: Optional[bytes]) -> Optional[str]:
    """sql_variant arrives as raw bytes of the underlying value."""
    if value is None:
        return None
    return "0x" + bytes(value).hex().upper()


async def register_output_converters(conn):
    """aioodbc ``after_created`` hook run on every new pooled connection."""
    await conn.add_output_converter(SQL_SS_TIMESTAMPOFFSET, decode_datetimeoffset)
    await conn.add_output_converter(SQL_SS_VARIANT, decode_sql_variant)


def unique_column_names(names: Sequence[str]) -> List[str]:
    """Suffix repeated column names so no value is dropped from a row.

    ``SELECT 1, 2`` yields ``["", "_1"]``.
    """
    seen = set()
    result = []
    for name in names:
        candidate = name
        suffix = 1
        while candidate in seen:
            candidate = f"{name}_{suffix}"
            suffix += 1
        seen.add(candidate)
        result.append(candidate)
    return result


class QueryResult(BaseModel):
    """Rows of the first result set plus per-statement affected counts."""

    columns: List[str] = Field(default_factory=list)
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    rows_affected: List[int] = Field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)


class AsyncMSSQLConnector:
    """Async SQL Server connector using aioodbc with connection pooling."""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.connection_string = config.get_connection_string()
        self._pool = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    async def initialize_pool(self):
        """Create the aioodbc pool and verify it can hand out a working connection.

        A pool with ``minsize=0`` opens nothing up front, so the probe query is what
        surfaces bad credentials or an unreachable host as a connection error.

        Raises:
            DatabaseConnectionError: If the pool cannot be created or probed
        """
        if aioodbc is None:
            raise DatabaseConnectionError("aioodbc is required for SQL Server connections")

        try:
            pool = await aioodbc.create_pool(
                dsn=self.connection_string,
                minsize=self.config.pool_min,
                maxsize=self.config.pool_max,
                pool_recycle=self.config.pool_idle_timeout,
                autocommit=True,
                timeout=self.config.timeout,
                after_created=register_output_converters
            )
        except Exception as e:
            logger.error(f"Failed to initialize async MSSQL pool: {e}")
            raise DatabaseConnectionError(
                f"Database connection error: {e}",
                details=self._connection_info()
            ) from e

        try:
            async with pool.acquire() as conn:
                async with conn.cursor() as cursor:
                    await cursor.execute(PROBE_QUERY)
                    await cursor.fetchone()
        except Exception as e:
            logger.error(f"SQL Server connection probe failed: {e}")
            await self._discard_pool(pool)
            raise DatabaseConnectionError(
                f"Database connection error: {e}",
                details=self._connection_info()
            ) from e
        except BaseException:
            # cancelled mid-probe, e.g. by SIGTERM
            await self._discard_pool(pool)
            raise

        self._pool = pool
        logger.info(
            f"✅ Async MSSQL connection pool initialized "
            f"(max: {self.config.pool_max}, min: {self.config.pool_min}, "
            f"idle timeout: {self.config.pool_idle_timeout}s)"
        )

    async def execute_query(self, query: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        """Execute one statement and collect its results.

        Args:
            query: SQL text, with ``?`` markers for bound parameters
            params: Values bound to the markers, in order

        Raises:
            DatabaseConnectionError: If the pool has not been initialized
            QueryExecutionError: If the driver reports a failure
        """
        if self._pool is None:
            raise DatabaseConnectionError("No database connection")

        try:
            async with self._pool.acquire() as conn:
                async with conn.cursor() as cursor:
                    if params:
                        await cursor.execute(query, *params)
                    else:
                        await cursor.execute(query)
                    return await self._collect_results(cursor)
        except Exception as e:
            logger.error(f"Async query error: {e}")
            raise QueryExecutionError(
                str(e),
                details={"query": query[:200]}  # first 200 chars for debugging
            ) from e

    async def _collect_results(self, cursor) -> QueryResult:
        """Walk every result set, keeping rows of the first one."""
        result = None
        rows_affected = []

        while True:
            if cursor.description:
                columns = unique_column_names([desc[0] for desc in cursor.description])
                rows = await cursor.fetchall()
                data = [dict(zip(columns, row)) for row in rows]
                rows_affected.append(len(data))
                if result is None:
                    result = QueryResult(columns=columns, rows=data)
            else:
                rows_affected.append(max(cursor.rowcount, 0))

            if not await cursor.nextset():
                break

        if result is None:
            result = QueryResult()
        result.rows_affected = rows_affected
        return result

    async def close(self):
        """Close connection pool."""
        if self._pool is not None:
            pool, self._pool = self._pool, None
            pool.close()
            await pool.wait_closed()
            logger.info("Async MSSQL connection pool closed")

    @staticmethod
    async def _discard_pool(pool):
        pool.close()
        await pool.wait_closed()

    def _connection_info(self) -> Dict[str, Any]:
        return {
            "server": self.config.server,
            "database": self.config.database,
            "port": self.config.port,
            "driver": self.config.driver,
            "encrypt": self.config.encrypt
        }


def create_database_connector(config: DatabaseConfig) -> AsyncMSSQLConnector:
    """
    Factory function to create the SQL Server connector.

    Args:
        config: Database configuration

    Returns:
        AsyncMSSQLConnector instance (pool not yet opened)

    Raises:
        DatabaseConnectionError: If server or database name is missing
    """
    if not config.is_complete:
        raise DatabaseConnectionError(
            "Database configuration incomplete: DB_SERVER and DB_NAME must be set",
            details={"server": config.server, "database": config.database}
        )
    return AsyncMSSQLConnector(config)
