"""Tool registry for routing MCP tool calls to handlers."""

import logging
from typing import Any, Dict, List, Optional

from mcp.types import Tool

from core.config import QueryConfig
from core.exceptions import UnknownToolError
from database.manager import ConnectionManager
from tools.base import ToolHandler
from tools.definitions import get_all_tools
from tools.handlers import (
    QueryHandler,
    ListTablesHandler,
    DescribeTableHandler,
    SampleDataHandler,
    SearchTablesHandler,
)

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Central registry for MCP tool handlers.

    Routes tool calls to the handler registered under the tool name, sharing
    one ConnectionManager across all of them.
    """

    def __init__(self, db_manager: ConnectionManager, query_config: Optional[QueryConfig] = None):
        self.db_manager = db_manager
        self.query_config = query_config or QueryConfig()
        self.handlers: Dict[str, ToolHandler] = {}
        self._register_handlers()

    def _register_handlers(self):
        """Register all tool handlers."""
        handler_classes = [
            QueryHandler,
            ListTablesHandler,
            DescribeTableHandler,
            SampleDataHandler,
            SearchTablesHandler,
        ]

        for handler_class in handler_classes:
            handler = handler_class(self.query_config)
            self.handlers[handler.tool_name] = handler
            logger.debug(f"Registered {handler.tool_name} -> {handler_class.__name__}")

        logger.info(f"✅ Registered {len(self.handlers)} MCP tools")

    def list_tools(self) -> List[Tool]:
        return get_all_tools()

    async def handle_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """
        Route tool call to appropriate handler.

        Args:
            name: Tool name from the MCP request
            arguments: Raw argument mapping

        Returns:
            Response document produced by the handler

        Raises:
            UnknownToolError: If no handler is registered under the name
        """
        handler = self.handlers.get(name)
        if handler is None:
            raise UnknownToolError(f"Unknown tool: {name}", details={"tool": name})

        logger.debug(f"Routing {name} to {handler.__class__.__name__}")
        return await handler.handle(arguments, self.db_manager)

    def is_tool_registered(self, tool_name: str) -> bool:
        """Check if a tool has a registered handler."""
        return tool_name in self.handlers
