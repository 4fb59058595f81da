"""Argument models for each tool."""

from typing import Any

from pydantic import BaseModel, field_validator

DEFAULT_SCHEMA = "dbo"
DEFAULT_SAMPLE_LIMIT = 10


class NoArguments(BaseModel):
    pass


class ExecuteQueryArguments(BaseModel):
    query: str


class TableArguments(BaseModel):
    table_name: str
    schema_name: str = DEFAULT_SCHEMA

    @field_validator("schema_name", mode="before")
    @classmethod
    def _default_schema(cls, value: Any) -> Any:
        # null or "" falls back to dbo
        return value or DEFAULT_SCHEMA


class SampleDataArguments(TableArguments):
    limit: int = DEFAULT_SAMPLE_LIMIT

    @field_validator("limit", mode="before")
    @classmethod
    def _default_limit(cls, value: Any) -> Any:
        return DEFAULT_SAMPLE_LIMIT if value is None else value


class SearchTablesArguments(BaseModel):
    search_term: str
