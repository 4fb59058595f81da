"""STDIO transport MCP server."""

import asyncio
import logging
import signal
from typing import Optional

from mcp.server.stdio import stdio_server

from core.config import AppConfig
from database.manager import ConnectionManager
from protocol.base_server import BaseMCPServer

logger = logging.getLogger(__name__)


class StdioMCPServer(BaseMCPServer):
    """MCP server using STDIO transport."""

    async def run(self):
        """Run the STDIO MCP server."""
        logger.info(f"{self.app_config.server_name} running on stdio")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )


def install_signal_handlers(task: asyncio.Task):
    """Cancel the serving task on SIGINT or SIGTERM."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, task.cancel)
        except (NotImplementedError, RuntimeError):
            # Windows event loops do not support add_signal_handler
            logger.debug(f"Signal handler for {sig.name} not installed")


async def run_stdio_server(app_config: Optional[AppConfig] = None):
    """Run STDIO MCP server until the transport closes or a termination signal arrives.

    The shared database connection is always closed on the way out.

    Args:
        app_config: App configuration (optional, defaults to env)
    """
    app_config = app_config or AppConfig.from_env()
    connection_manager = ConnectionManager(app_config.database)
    server = StdioMCPServer(connection_manager, app_config)

    install_signal_handlers(asyncio.current_task())

    try:
        await server.run()
    except asyncio.CancelledError:
        logger.info("Termination signal received, shutting down")
    finally:
        await server.shutdown()
