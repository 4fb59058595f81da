"""Tool handlers package."""

from tools.handlers.query_handler import QueryHandler
from tools.handlers.schema_handler import DescribeTableHandler, ListTablesHandler, SearchTablesHandler
from tools.handlers.sample_handler import SampleDataHandler

__all__ = [
    'QueryHandler',
    'ListTablesHandler',
    'DescribeTableHandler',
    'SampleDataHandler',
    'SearchTablesHandler',
]
