"""Base class for MCP tool handlers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from core.config import QueryConfig
from core.exceptions import InvalidToolInputError, QueryExecutionError
from tools.arguments import NoArguments

logger = logging.getLogger(__name__)


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


class ToolHandler(ABC):
    """
    One tool: an argument model, a pre-connection check and a query.

    handle() runs the shared sequence:
    parse arguments -> validate -> ensure_connected -> execute -> wrap errors.
    """

    tool_name: str = ""
    arguments_model: Type[BaseModel] = NoArguments
    # Prefix for execution errors raised by this tool
    error_context: str = "Error executing tool"

    def __init__(self, query_config: Optional[QueryConfig] = None):
        self.query_config = query_config or QueryConfig()

    def parse_arguments(self, arguments: Optional[Dict[str, Any]]) -> BaseModel:
        """Validate the raw argument mapping against the tool's model."""
        try:
            return self.arguments_model.model_validate(arguments or {})
        except ValidationError as e:
            raise InvalidToolInputError(
                f"Invalid arguments for {self.tool_name}: {_describe_validation_error(e)}",
                details={"tool": self.tool_name}
            ) from e

    def validate(self, args: BaseModel) -> None:
        """Reject caller errors before any database work. No-op by default."""

    @abstractmethod
    async def execute(self, args: BaseModel, db_manager: Any) -> Any:
        """
        Run the tool's query and build its response document.

        Args:
            args: Validated arguments
            db_manager: Connected ConnectionManager

        Returns:
            JSON-serializable response document
        """

    async def handle(self, arguments: Optional[Dict[str, Any]], db_manager: Any) -> Any:
        """
        Handle tool invocation.

        Args:
            arguments: Raw argument mapping from the MCP request
            db_manager: ConnectionManager instance

        Returns:
            Response document for the envelope
        """
        args = self.parse_arguments(arguments)
        self.validate(args)

        await db_manager.ensure_connected()

        try:
            return await self.execute(args, db_manager)
        except QueryExecutionError as e:
            raise QueryExecutionError(f"{self.error_context}: {e.message}", e.details) from e
