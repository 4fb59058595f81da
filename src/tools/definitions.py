"""MCP tool definitions for the SQL Server MCP server."""

from typing import List
from mcp.types import Tool

from tools.arguments import DEFAULT_SAMPLE_LIMIT, DEFAULT_SCHEMA


TOOL_EXECUTE_QUERY = "execute_query"
TOOL_LIST_TABLES = "list_tables"
TOOL_DESCRIBE_TABLE = "describe_table"
TOOL_GET_SAMPLE_DATA = "get_sample_data"
TOOL_SEARCH_TABLES = "search_tables"

TOOL_NAMES = (
    TOOL_EXECUTE_QUERY,
    TOOL_LIST_TABLES,
    TOOL_DESCRIBE_TABLE,
    TOOL_GET_SAMPLE_DATA,
    TOOL_SEARCH_TABLES,
)


def get_all_tools() -> List[Tool]:
    """Generate all MCP tool definitions.

    Returns:
        List of Tool objects, one per supported tool
    """
    return [
        Tool(
            name=TOOL_EXECUTE_QUERY,
            description=(
                "Execute a SQL SELECT query on the database. "
                "READ-ONLY: statements that do not start with SELECT are rejected. "
                "Uses T-SQL syntax (TOP N instead of LIMIT, GETDATE() for the current date)."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "The SQL SELECT query to execute"
                    }
                },
                "required": ["query"]
            }
        ),
        Tool(
            name=TOOL_LIST_TABLES,
            description="List all base tables in the database, ordered by schema and name",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
        Tool(
            name=TOOL_DESCRIBE_TABLE,
            description="Get the column structure of a specific table",
            inputSchema={
                "type": "object",
                "properties": {
                    "table_name": {
                        "type": "string",
                        "description": "Name of the table to describe"
                    },
                    "schema_name": {
                        "type": "string",
                        "description": f"Schema name (optional, defaults to {DEFAULT_SCHEMA})",
                        "default": DEFAULT_SCHEMA
                    }
                },
                "required": ["table_name"]
            }
        ),
        Tool(
            name=TOOL_GET_SAMPLE_DATA,
            description="Get sample rows from a table",
            inputSchema={
                "type": "object",
                "properties": {
                    "table_name": {
                        "type": "string",
                        "description": "Name of the table"
                    },
                    "schema_name": {
                        "type": "string",
                        "description": f"Schema name (optional, defaults to {DEFAULT_SCHEMA})",
                        "default": DEFAULT_SCHEMA
                    },
                    "limit": {
                        "type": "number",
                        "description": f"Number of rows to fetch (defaults to {DEFAULT_SAMPLE_LIMIT})",
                        "default": DEFAULT_SAMPLE_LIMIT
                    }
                },
                "required": ["table_name"]
            }
        ),
        Tool(
            name=TOOL_SEARCH_TABLES,
            description="Search for tables whose name contains a term",
            inputSchema={
                "type": "object",
                "properties": {
                    "search_term": {
                        "type": "string",
                        "description": "Term to look for in table names"
                    }
                },
                "required": ["search_term"]
            }
        ),
    ]
