"""Entry point for the SQL Server MCP server.

The server speaks MCP over stdio, so all logging goes to stderr.

Usage:
    sqlserver-mcp-server
    sqlserver-mcp-server --log-level DEBUG
"""

import argparse
import asyncio
import logging
import sys

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str):
    """Send all log records to stderr; stdout belongs to the transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr
    )


async def run_stdio_mode(app_config):
    """Run MCP server in STDIO mode."""
    logger.info("Starting SQL Server MCP server in STDIO mode")

    from protocol.stdio_server import run_stdio_server
    try:
        await run_stdio_server(app_config)
    except Exception as e:
        logger.error(f"STDIO server error: {e}", exc_info=True)
        sys.exit(1)


def main():
    """Main entry point with argument parsing."""
    from core.config import AppConfig

    parser = argparse.ArgumentParser(
        description="SQL Server MCP Server - read-only database tools over stdio"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: from LOG_LEVEL env or INFO)"
    )

    args = parser.parse_args()

    app_config = AppConfig.from_env()
    configure_logging(args.log_level or app_config.log_level)

    asyncio.run(run_stdio_mode(app_config))


if __name__ == "__main__":
    main()
