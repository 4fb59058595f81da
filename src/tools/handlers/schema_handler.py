"""Catalog handlers backed by INFORMATION_SCHEMA."""

import logging
from typing import Any, Dict, List

from core.exceptions import InvalidToolInputError
from tools.arguments import NoArguments, SearchTablesArguments, TableArguments
from tools.base import ToolHandler
from tools.definitions import TOOL_DESCRIBE_TABLE, TOOL_LIST_TABLES, TOOL_SEARCH_TABLES

logger = logging.getLogger(__name__)


LIST_TABLES_SQL = """
    SELECT
        TABLE_SCHEMA,
        TABLE_NAME,
        TABLE_TYPE
    FROM INFORMATION_SCHEMA.TABLES
    WHERE TABLE_TYPE = 'BASE TABLE'
    ORDER BY TABLE_SCHEMA, TABLE_NAME
"""

DESCRIBE_TABLE_SQL = """
    SELECT
        COLUMN_NAME,
        DATA_TYPE,
        IS_NULLABLE,
        COLUMN_DEFAULT,
        CHARACTER_MAXIMUM_LENGTH,
        NUMERIC_PRECISION,
        NUMERIC_SCALE,
        ORDINAL_POSITION
    FROM INFORMATION_SCHEMA.COLUMNS
    WHERE TABLE_SCHEMA = ?
      AND TABLE_NAME = ?
    ORDER BY ORDINAL_POSITION
"""

SEARCH_TABLES_SQL = """
    SELECT
        TABLE_SCHEMA,
        TABLE_NAME,
        TABLE_TYPE
    FROM INFORMATION_SCHEMA.TABLES
    WHERE TABLE_TYPE = 'BASE TABLE'
      AND TABLE_NAME LIKE ?
    ORDER BY TABLE_SCHEMA, TABLE_NAME
"""


class ListTablesHandler(ToolHandler):
    """Lists base tables; views are excluded."""

    tool_name = TOOL_LIST_TABLES
    arguments_model = NoArguments
    error_context = "Error listing tables"

    async def execute(self, args: NoArguments, db_manager: Any) -> List[Dict[str, Any]]:
        result = await db_manager.execute_query(LIST_TABLES_SQL)
        return result.rows


class DescribeTableHandler(ToolHandler):
    """Column metadata for one table, in ordinal order."""

    tool_name = TOOL_DESCRIBE_TABLE
    arguments_model = TableArguments
    error_context = "Error describing table"

    async def execute(self, args: TableArguments, db_manager: Any) -> Dict[str, Any]:
        result = await db_manager.execute_query(
            DESCRIBE_TABLE_SQL, [args.schema_name, args.table_name]
        )

        if not result.rows:
            raise InvalidToolInputError(
                f"Table {args.schema_name}.{args.table_name} not found",
                details={"schema": args.schema_name, "table": args.table_name}
            )

        return {
            "schema": args.schema_name,
            "table": args.table_name,
            "columns": result.rows,
        }


class SearchTablesHandler(ToolHandler):
    """Base tables whose name contains the search term."""

    tool_name = TOOL_SEARCH_TABLES
    arguments_model = SearchTablesArguments
    error_context = "Error searching tables"

    async def execute(self, args: SearchTablesArguments, db_manager: Any) -> Dict[str, Any]:
        # The term keeps any LIKE wildcards of its own
        pattern = f"%{args.search_term}%"
        result = await db_manager.execute_query(SEARCH_TABLES_SQL, [pattern])

        return {
            "searchTerm": args.search_term,
            "matches": result.rows,
            "totalMatches": result.row_count,
        }
