"""
pytest configuration.

Puts src/ on the import path and provides in-memory stand-ins for the
aioodbc pool, connection and cursor so no live SQL Server is needed.
"""

import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

import pytest

# Add src to the Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


class FakeCursor:
    """Replays scripted result sets.

    Each result set is ``(columns, rows, rowcount)``; ``columns=None`` models a
    statement without a row set.
    """

    def __init__(self, result_sets: Optional[List[Tuple]] = None, error: Exception = None):
        self.result_sets = result_sets if result_sets is not None else [(["value"], [(1,)], -1)]
        self.error = error
        self.executed: List[Tuple[str, Tuple[Any, ...]]] = []
        self._index = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def execute(self, query: str, *params):
        self.executed.append((query, params))
        self._index = 0
        if self.error is not None:
            raise self.error

    @property
    def _current(self):
        return self.result_sets[self._index]

    @property
    def description(self):
        columns = self._current[0]
        if columns is None:
            return None
        return [(name, None, None, None, None, None, None) for name in columns]

    @property
    def rowcount(self) -> int:
        return self._current[2]

    async def fetchall(self):
        return list(self._current[1])

    async def fetchone(self):
        rows = self._current[1]
        return rows[0] if rows else None

    async def nextset(self) -> bool:
        self._index += 1
        return self._index < len(self.result_sets)


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor

    def cursor(self) -> FakeCursor:
        return self._cursor


class _Acquire:
    def __init__(self, pool: "FakePool"):
        self.pool = pool

    async def __aenter__(self):
        self.pool.acquired += 1
        return FakeConnection(self.pool.cursor)

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakePool:
    def __init__(self, cursor: Optional[FakeCursor] = None):
        self.cursor = cursor or FakeCursor()
        self.acquired = 0
        self.closed = False
        self.wait_closed_called = False

    def acquire(self) -> _Acquire:
        return _Acquire(self)

    def close(self):
        self.closed = True

    async def wait_closed(self):
        self.wait_closed_called = True


@pytest.fixture
def make_cursor():
    """Factory for scripted cursors"""
    return FakeCursor


@pytest.fixture
def make_pool():
    """Factory for fake pools wrapping a cursor"""
    return FakePool


@pytest.fixture
def fake_cursor():
    return FakeCursor()


@pytest.fixture
def fake_pool(fake_cursor):
    return FakePool(fake_cursor)


@pytest.fixture
def db_config():
    """Complete database configuration fixture"""
    from core.config import DatabaseConfig
    return DatabaseConfig(
        server="sql.example.local",
        database="Northwind",
        username="reader",
        password="s3cret",
        driver="ODBC Driver 18 for SQL Server",
    )


@pytest.fixture
def sample_query():
    """Sample query fixture"""
    return "SELECT TOP 10 name FROM sys.tables"


@pytest.fixture
def sample_write_queries() -> Sequence[str]:
    """Statements that must never reach the database"""
    return [
        "INSERT INTO Orders (Id) VALUES (1)",
        "UPDATE Customers SET Name = 'x'",
        "DELETE FROM Products WHERE Id = 1",
        "DROP TABLE Orders",
        "ALTER TABLE Orders ADD Note NVARCHAR(10)",
        "EXEC sp_who",
        "TRUNCATE TABLE Orders",
        "WITH cte AS (SELECT 1 AS x) SELECT * FROM cte",
        "  -- comment\nSELECT 1",
    ]
