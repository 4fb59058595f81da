"""Base MCP server - transport-agnostic MCP protocol wiring."""

import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.types import CallToolRequest, CallToolResult, ServerResult, TextContent, Tool

from core.config import AppConfig
from core.error_handling import format_tool_response, to_mcp_error
from core.exceptions import MCPDBError
from database.manager import ConnectionManager
from tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class BaseMCPServer:
    """Base MCP server providing core protocol functionality.

    Binds the tool registry to an MCP ``Server`` independent of the transport.
    """

    def __init__(self, connection_manager: ConnectionManager, app_config: AppConfig):
        """Initialize base MCP server.

        Args:
            connection_manager: Shared ConnectionManager for all tool calls
            app_config: Application configuration
        """
        self.connection_manager = connection_manager
        self.app_config = app_config
        self.registry = ToolRegistry(connection_manager, app_config.query_config)
        self.server = Server(app_config.server_name, version=app_config.server_version)
        self._setup_handlers()
        logger.info(f"Initialized {app_config.server_name} MCP server")

    async def list_tools(self) -> List[Tool]:
        """List all available tools."""
        return self.registry.list_tools()

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Dispatch one tool call and wrap its document as text content.

        Raises:
            McpError: For every failure, carrying the error kind's JSON-RPC code
        """
        try:
            data = await self.registry.handle_tool(name, arguments or {})
        except MCPDBError as e:
            raise to_mcp_error(e) from e
        return format_tool_response(data)

    def _setup_handlers(self):
        """Setup MCP protocol handlers.

        tools/call is registered directly in ``request_handlers`` so an ``McpError``
        reaches the client as a JSON-RPC error with its code. The ``call_tool()``
        decorator would fold every failure into an ``isError`` result.
        """

        @self.server.list_tools()
        async def list_tools():
            return await self.list_tools()

        async def handle_call_tool(request: CallToolRequest) -> ServerResult:
            content = await self.call_tool(request.params.name, request.params.arguments)
            return ServerResult(CallToolResult(content=content, isError=False))

        self.server.request_handlers[CallToolRequest] = handle_call_tool

    async def shutdown(self):
        """Release the shared database connection."""
        await self.connection_manager.shutdown()
