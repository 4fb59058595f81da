"""MCP protocol transports."""
