"""Input validators applied before a request reaches the database."""

import re
from typing import Tuple


class SQLValidator:
    """Read-only gate for caller-supplied SQL."""

    READ_ONLY_KEYWORD = "select"

    @classmethod
    def validate_query(cls, query: str, max_length: int = 50000) -> Tuple[bool, str]:
        """
        Validate that a SQL query is a read-only SELECT.

        Args:
            query: SQL query string to validate
            max_length: Maximum accepted query length in characters

        Returns:
            Tuple of (is_valid, error_message)
            - is_valid: True if query passes all checks
            - error_message: Empty string if valid, error description if invalid
        """
        if not query or not query.strip():
            return False, "Empty query"

        if not query.strip().lower().startswith(cls.READ_ONLY_KEYWORD):
            return False, "Only SELECT queries are allowed for security reasons"

        if len(query) > max_length:
            return False, f"Query too long (max {max_length} characters)"

        return True, ""


class InputValidator:
    """Identifier and limit validation for internally built statements."""

    # sysname is nvarchar(128)
    MAX_IDENTIFIER_LENGTH = 128

    _CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]')

    @classmethod
    def validate_identifier(cls, name: str, kind: str = "Identifier") -> Tuple[bool, str]:
        """
        Validate a schema or table name that will be interpolated into SQL text.

        Args:
            name: Identifier to validate
            kind: Label used in the error message

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not name or not name.strip():
            return False, f"{kind} cannot be empty"

        if len(name) > cls.MAX_IDENTIFIER_LENGTH:
            return False, f"{kind} too long (max {cls.MAX_IDENTIFIER_LENGTH} characters)"

        if cls._CONTROL_CHARS.search(name):
            return False, f"{kind} contains control characters"

        return True, ""

    @staticmethod
    def quote_identifier(name: str) -> str:
        """Bracket-quote an identifier, doubling any closing bracket it contains."""
        return "[" + name.replace("]", "]]") + "]"

    @staticmethod
    def validate_limit(limit: int, max_limit: int = 10000) -> Tuple[bool, str]:
        """
        Validate a row limit.

        Args:
            limit: Requested limit value
            max_limit: Maximum allowed limit

        Returns:
            Tuple of (is_valid, error_message)
        """
        if limit < 0:
            return False, "Limit cannot be negative"

        if limit > max_limit:
            return False, f"Limit exceeds maximum allowed ({max_limit})"

        return True, ""
