"""
Configuration unit tests.
"""

import sys
from unittest.mock import MagicMock, patch

import pytest

from core.config import AppConfig, DatabaseConfig, QueryConfig, detect_mssql_driver

DB_ENV_VARS = [
    "DB_SERVER", "DB_HOST", "DB_NAME", "DB_USER", "DB_PASSWORD", "DB_PORT", "DB_TIMEOUT",
    "MSSQL_DRIVER", "DB_ENCRYPT", "DB_TRUST_SERVER_CERTIFICATE", "DB_TRUSTED_CONNECTION",
    "DB_POOL_MAX", "DB_POOL_MIN", "DB_POOL_IDLE_TIMEOUT", "MAX_QUERY_LENGTH",
    "MAX_SAMPLE_LIMIT", "MCP_SERVER_NAME", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Environment without any database settings"""
    for name in DB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MSSQL_DRIVER", "ODBC Driver 18 for SQL Server")
    return monkeypatch


class TestDatabaseConfig:
    """DatabaseConfig tests"""

    def test_from_env(self, clean_env):
        """✅ Values read from DB_* variables"""
        clean_env.setenv("DB_SERVER", "sql01")
        clean_env.setenv("DB_NAME", "Northwind")
        clean_env.setenv("DB_USER", "reader")
        clean_env.setenv("DB_PASSWORD", "pw")
        clean_env.setenv("DB_POOL_MAX", "4")

        config = DatabaseConfig.from_env()

        assert config.server == "sql01"
        assert config.database == "Northwind"
        assert config.username == "reader"
        assert config.password == "pw"
        assert config.pool_max == 4
        assert config.is_complete is True

    def test_defaults(self, clean_env):
        """✅ Pool policy and TLS defaults"""
        config = DatabaseConfig.from_env()

        assert config.pool_max == 10
        assert config.pool_min == 0
        assert config.pool_idle_timeout == 30
        assert config.encrypt is True
        assert config.trust_server_certificate is True
        assert config.port == 1433
        assert config.is_complete is False

    def test_db_host_fallback(self, clean_env):
        """✅ DB_HOST used when DB_SERVER is absent"""
        clean_env.setenv("DB_HOST", "legacy-host")
        assert DatabaseConfig.from_env().server == "legacy-host"

    def test_boolean_flags(self, clean_env):
        """✅ Flag parsing"""
        clean_env.setenv("DB_ENCRYPT", "false")
        clean_env.setenv("DB_TRUSTED_CONNECTION", "yes")
        config = DatabaseConfig.from_env()
        assert config.encrypt is False
        assert config.trusted_connection is True

    def test_connection_string(self, db_config):
        """✅ ODBC connection string"""
        connection_string = db_config.get_connection_string()

        assert connection_string == (
            "DRIVER={ODBC Driver 18 for SQL Server};SERVER=sql.example.local,1433;"
            "DATABASE=Northwind;UID=reader;PWD=s3cret;Encrypt=yes;TrustServerCertificate=yes"
        )

    def test_connection_string_without_encryption(self, db_config):
        """✅ Encrypt=no omits TrustServerCertificate"""
        config = db_config.model_copy(update={"encrypt": False})
        connection_string = config.get_connection_string()
        assert "Encrypt=no" in connection_string
        assert "TrustServerCertificate" not in connection_string

    def test_trusted_connection(self, db_config):
        """✅ Windows authentication drops UID/PWD"""
        config = db_config.model_copy(update={"trusted_connection": True})
        connection_string = config.get_connection_string()
        assert "Trusted_Connection=yes" in connection_string
        assert "PWD" not in connection_string

    def test_masked_connection_string(self, db_config):
        """✅ Password hidden for logs"""
        masked = db_config.masked_connection_string()
        assert "s3cret" not in masked
        assert "PWD=***" in masked


class TestDriverDetection:
    def test_prefers_newest_driver(self):
        """✅ Driver 18 preferred"""
        drivers = ["SQL Server", "ODBC Driver 17 for SQL Server", "ODBC Driver 18 for SQL Server"]
        with patch.dict(sys.modules, {"pyodbc": MagicMock(drivers=MagicMock(return_value=drivers))}):
            assert detect_mssql_driver() == "ODBC Driver 18 for SQL Server"

    def test_falls_back_to_any_sql_server_driver(self):
        """✅ Any SQL Server driver"""
        drivers = ["PostgreSQL Unicode", "SQL Server Native Client 11.0"]
        with patch.dict(sys.modules, {"pyodbc": MagicMock(drivers=MagicMock(return_value=drivers))}):
            assert detect_mssql_driver() == "SQL Server Native Client 11.0"

    def test_default_when_none_installed(self):
        """✅ Default name when nothing is installed"""
        with patch.dict(sys.modules, {"pyodbc": MagicMock(drivers=MagicMock(return_value=[]))}):
            assert detect_mssql_driver() == "ODBC Driver 18 for SQL Server"


class TestAppConfig:
    def test_from_env(self, clean_env):
        """✅ Combined configuration"""
        clean_env.setenv("MAX_QUERY_LENGTH", "100")
        clean_env.setenv("MAX_SAMPLE_LIMIT", "50")
        clean_env.setenv("LOG_LEVEL", "debug")

        config = AppConfig.from_env()

        assert config.server_name == "sqlserver-mcp-server"
        assert config.server_version == "0.1.0"
        assert config.log_level == "DEBUG"
        assert config.query_config == QueryConfig(max_query_length=100, max_sample_limit=50)
