"""Core modules for the SQL Server MCP server."""

from .exceptions import (
    MCPDBError,
    DatabaseConnectionError,
    InvalidToolInputError,
    QueryExecutionError,
    UnknownToolError
)

__all__ = [
    "MCPDBError",
    "DatabaseConnectionError",
    "InvalidToolInputError",
    "QueryExecutionError",
    "UnknownToolError"
]
