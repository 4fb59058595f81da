"""MCP tools package for the SQL Server MCP server."""

from tools.base import ToolHandler
from tools.registry import ToolRegistry
from tools.definitions import TOOL_NAMES, get_all_tools
from tools.validators import SQLValidator, InputValidator

__all__ = [
    'ToolHandler',
    'ToolRegistry',
    'TOOL_NAMES',
    'get_all_tools',
    'SQLValidator',
    'InputValidator',
]
