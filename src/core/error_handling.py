"""Response envelope and error conversion for the MCP protocol.

Successful tool calls become a single text content item holding pretty-printed JSON.
Failures become an ``McpError`` carrying the JSON-RPC code of the exception kind.
"""

import json
import logging
import uuid
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, List

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, ErrorData, TextContent

from core.exceptions import MCPDBError

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    """Convert driver values that json cannot encode natively."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "0x" + bytes(value).hex().upper()
    if isinstance(value, uuid.UUID):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json_text(data: Any) -> str:
    """Serialize a response document the way every tool reports it."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=_json_default)


def format_tool_response(data: Any) -> List[TextContent]:
    """Wrap a response document as the sole text content item.

    Args:
        data: The structured response document

    Returns:
        One-element content list for the MCP call_tool result
    """
    return [TextContent(type="text", text=to_json_text(data))]


def to_mcp_error(error: MCPDBError) -> McpError:
    """Convert a server exception into the protocol error the client receives.

    Args:
        error: The exception raised by a tool handler

    Returns:
        McpError with the exception's JSON-RPC code and message
    """
    if error.error_code == INTERNAL_ERROR:
        logger.error(f"{type(error).__name__}: {error.message}")
    else:
        logger.warning(f"{type(error).__name__}: {error.message}")
    return McpError(
        ErrorData(
            code=error.error_code,
            message=error.message,
            data=error.to_dict() if error.details else None
        )
    )
