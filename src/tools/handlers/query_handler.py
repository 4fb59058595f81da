"""Free-form query execution handler with the read-only gate."""

import logging
from typing import Any, Dict

from core.exceptions import InvalidToolInputError
from tools.arguments import ExecuteQueryArguments
from tools.base import ToolHandler
from tools.definitions import TOOL_EXECUTE_QUERY
from tools.validators import SQLValidator

logger = logging.getLogger(__name__)


class QueryHandler(ToolHandler):
    """Handler for caller-supplied SELECT statements."""

    tool_name = TOOL_EXECUTE_QUERY
    arguments_model = ExecuteQueryArguments
    error_context = "Error executing query"

    def validate(self, args: ExecuteQueryArguments) -> None:
        is_valid, error_msg = SQLValidator.validate_query(
            args.query, max_length=self.query_config.max_query_length
        )
        if not is_valid:
            logger.warning(f"Query blocked by security validation: {error_msg}")
            raise InvalidToolInputError(error_msg)

    async def execute(self, args: ExecuteQueryArguments, db_manager: Any) -> Dict[str, Any]:
        # Statement runs verbatim
        result = await db_manager.execute_query(args.query)

        return {
            "rowsAffected": result.rows_affected,
            "recordset": result.rows,
            "totalRows": result.row_count,
        }
