"""Configuration management for the SQL Server MCP server."""

import logging
import os
from typing import Optional
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env, honouring an explicit path first
_env_loaded = False

env_file = os.getenv('ENV_FILE_PATH')
if env_file and Path(env_file).exists():
    load_dotenv(env_file, override=False)
    _env_loaded = True
else:
    possible_paths = [
        Path.cwd() / '.env',
        Path(__file__).parent.parent.parent / '.env',
    ]
    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(str(env_path), override=False)
            _env_loaded = True
            break

if not _env_loaded:
    load_dotenv()


DEFAULT_DRIVER = "ODBC Driver 18 for SQL Server"


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").strip().lower() in ("1", "true", "yes")


def detect_mssql_driver() -> str:
    """Detect the best installed SQL Server ODBC driver.

    Returns:
        str: Driver name, preferring Driver 18 > Driver 17 > Driver 13
    """
    try:
        import pyodbc
        available_drivers = pyodbc.drivers()
    except (ImportError, AttributeError) as e:
        logger.debug(f"ODBC driver detection unavailable: {e}")
        return DEFAULT_DRIVER

    preferred_drivers = [
        "ODBC Driver 18 for SQL Server",
        "ODBC Driver 17 for SQL Server",
        "ODBC Driver 13 for SQL Server",
    ]

    for driver in preferred_drivers:
        if driver in available_drivers:
            return driver

    for driver in available_drivers:
        if "SQL Server" in driver:
            return driver

    # Nothing found; the connection attempt will report it
    return DEFAULT_DRIVER


class DatabaseConfig(BaseModel):
    """SQL Server connection and pool configuration."""

    server: str = Field(default="", description="Database server hostname or IP")
    database: str = Field(default="", description="Database name")
    username: Optional[str] = Field(default=None, description="Database username")
    password: Optional[str] = Field(default=None, description="Database password")
    port: int = Field(default=1433, description="Database port")
    timeout: int = Field(default=30, description="Login timeout in seconds")

    driver: str = Field(default=DEFAULT_DRIVER, description="ODBC driver for SQL Server")
    trusted_connection: bool = Field(default=False, description="Use Windows authentication")
    encrypt: bool = Field(default=True, description="Encrypt the connection")
    trust_server_certificate: bool = Field(default=True, description="Trust self-signed certificates")

    pool_max: int = Field(default=10, ge=1, description="Maximum pooled connections")
    pool_min: int = Field(default=0, ge=0, description="Minimum pooled connections")
    pool_idle_timeout: int = Field(default=30, description="Seconds before an idle connection is recycled")

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Create configuration from environment variables."""
        driver = os.getenv("MSSQL_DRIVER") or detect_mssql_driver()

        return cls(
            server=os.getenv("DB_SERVER") or os.getenv("DB_HOST", ""),
            database=os.getenv("DB_NAME", ""),
            username=os.getenv("DB_USER") or None,
            password=os.getenv("DB_PASSWORD") or None,
            port=int(os.getenv("DB_PORT", "1433")),
            timeout=int(os.getenv("DB_TIMEOUT", "30")),
            driver=driver,
            trusted_connection=_env_flag("DB_TRUSTED_CONNECTION", False),
            encrypt=_env_flag("DB_ENCRYPT", True),
            trust_server_certificate=_env_flag("DB_TRUST_SERVER_CERTIFICATE", True),
            pool_max=int(os.getenv("DB_POOL_MAX", "10")),
            pool_min=int(os.getenv("DB_POOL_MIN", "0")),
            pool_idle_timeout=int(os.getenv("DB_POOL_IDLE_TIMEOUT", "30")),
        )

    @property
    def is_complete(self) -> bool:
        """Whether enough settings are present to attempt a connection."""
        return bool(self.server.strip()) and bool(self.database.strip())

    def get_connection_string(self) -> str:
        """Generate ODBC connection string for SQL Server."""
        parts = [
            f"DRIVER={{{self.driver}}}",
            f"SERVER={self.server},{self.port}",
            f"DATABASE={self.database}",
        ]

        if self.trusted_connection:
            parts.append("Trusted_Connection=yes")
        elif self.username:
            parts.extend([f"UID={self.username}", f"PWD={self.password or ''}"])

        # Driver 18 defaults to Encrypt=yes, so always be explicit
        if self.encrypt:
            parts.append("Encrypt=yes")
            if self.trust_server_certificate:
                parts.append("TrustServerCertificate=yes")
        else:
            parts.append("Encrypt=no")

        return ";".join(parts)

    def masked_connection_string(self) -> str:
        """Connection string safe for logs."""
        connection_string = self.get_connection_string()
        if self.password:
            connection_string = connection_string.replace(f"PWD={self.password}", "PWD=***")
        return connection_string


class QueryConfig(BaseModel):
    """Query validation and limit configuration."""

    max_query_length: int = 50000  # Maximum SQL query length in characters
    max_sample_limit: int = 10000  # Maximum rows get_sample_data may request

    @classmethod
    def from_env(cls) -> "QueryConfig":
        """Create query configuration from environment variables."""
        return cls(
            max_query_length=int(os.getenv("MAX_QUERY_LENGTH", "50000")),
            max_sample_limit=int(os.getenv("MAX_SAMPLE_LIMIT", "10000"))
        )


class AppConfig(BaseModel):
    """Application configuration combining all configs."""

    database: DatabaseConfig
    query_config: QueryConfig = Field(default_factory=QueryConfig)
    server_name: str = Field(default="sqlserver-mcp-server", description="MCP server name identifier")
    server_version: str = Field(default="0.1.0", description="MCP server version reported to clients")
    log_level: str = Field(default="INFO", description="Root logging level")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create full application configuration from environment variables."""
        return cls(
            database=DatabaseConfig.from_env(),
            query_config=QueryConfig.from_env(),
            server_name=os.getenv("MCP_SERVER_NAME", "sqlserver-mcp-server"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
