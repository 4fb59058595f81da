"""Sample row handler."""

import logging
from typing import Any, Dict

from core.exceptions import InvalidToolInputError
from tools.arguments import SampleDataArguments
from tools.base import ToolHandler
from tools.definitions import TOOL_GET_SAMPLE_DATA
from tools.validators import InputValidator

logger = logging.getLogger(__name__)


class SampleDataHandler(ToolHandler):
    """Handler for TOP-N sampling of a table.

    Schema and table names cannot be bound as parameters in T-SQL, so they are
    validated and bracket-quoted into the statement. The limit is always bound.
    Table existence is not checked; the database reports a missing table.
    """

    tool_name = TOOL_GET_SAMPLE_DATA
    arguments_model = SampleDataArguments
    error_context = "Error fetching sample data"

    def validate(self, args: SampleDataArguments) -> None:
        checks = [
            InputValidator.validate_identifier(args.schema_name, "Schema name"),
            InputValidator.validate_identifier(args.table_name, "Table name"),
            InputValidator.validate_limit(args.limit, self.query_config.max_sample_limit),
        ]
        for is_valid, error_msg in checks:
            if not is_valid:
                raise InvalidToolInputError(error_msg)

    def build_query(self, args: SampleDataArguments) -> str:
        qualified_name = (
            f"{InputValidator.quote_identifier(args.schema_name)}."
            f"{InputValidator.quote_identifier(args.table_name)}"
        )
        return f"SELECT TOP (?) * FROM {qualified_name}"

    async def execute(self, args: SampleDataArguments, db_manager: Any) -> Dict[str, Any]:
        query = self.build_query(args)
        logger.debug(f"Sampling {args.limit} rows: {query}")
        result = await db_manager.execute_query(query, [args.limit])

        return {
            "schema": args.schema_name,
            "table": args.table_name,
            "sampleSize": result.row_count,
            "data": result.rows,
        }
