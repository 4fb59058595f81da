"""Custom exceptions for the SQL Server MCP server."""

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class MCPDBError(Exception):
    """Base exception for all MCP database server errors."""

    # JSON-RPC error code reported to the MCP client
    error_code: int = INTERNAL_ERROR

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for protocol responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class DatabaseConnectionError(MCPDBError):
    """Exception raised when the shared connection cannot be established."""
    pass


class InvalidToolInputError(MCPDBError):
    """Exception raised when tool arguments are rejected before reaching the database."""

    error_code = INVALID_PARAMS


class QueryExecutionError(MCPDBError):
    """Exception raised when the database fails to execute a statement."""
    pass


class UnknownToolError(MCPDBError):
    """Exception raised when a tool name matches no registered handler."""

    error_code = METHOD_NOT_FOUND
