"""Database connectivity for the SQL Server MCP server."""

from .manager import ConnectionManager
from .connectors import AsyncMSSQLConnector, QueryResult, create_database_connector

__all__ = [
    "ConnectionManager",
    "AsyncMSSQLConnector",
    "QueryResult",
    "create_database_connector"
]
