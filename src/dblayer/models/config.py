"""Database configuration model."""

import logging
import os
from enum import Enum
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.engine.url import URL

from dblayer.models.dialect import Dialect

logger = logging.getLogger(__name__)

# SQLAlchemy driver names used for each dialect (sync drivers)
DRIVERNAMES = {
    Dialect.MYSQL: "mysql+pymysql",
    Dialect.POSTGRESQL: "postgresql+psycopg",
    Dialect.SQLITE: "sqlite",
}


class ErrorMode(str, Enum):
    """How statement errors outside of query() are reported."""

    SILENT = "silent"
    WARNING = "warning"
    EXCEPTION = "exception"


class DatabaseConfig(BaseModel):
    """Configuration for the shared database connection."""

    driver: Dialect = Field(
        ...,
        description="Database driver type (mysql, postgres, sqlite)",
    )
    host: str = Field(
        default="localhost",
        description="Database server host",
    )
    database: str = Field(
        ...,
        description="Database name (file path for sqlite)",
    )
    port: Optional[int] = Field(
        default=None,
        ge=1,
        le=65535,
        description="Database server port, driver default when unset",
    )
    user: Optional[str] = Field(default=None, description="Database user")
    password: Optional[str] = Field(default=None, description="Database password")
    error_mode: ErrorMode = Field(
        default=ErrorMode.SILENT,
        description="Reporting of statement errors in query_insert/query_direct",
    )
    persistent: bool = Field(
        default=False,
        description="Keep the physical connection pooled across close()",
    )
    sql_error_log: str = Field(
        default="sql_errors.log",
        description="Append-only log file for failed statements",
    )
    fail_fast: bool = Field(
        default=True,
        description="Terminate the process when the lazy connect fails",
    )
    echo_sql: bool = Field(
        default=False,
        description="Echo SQL statements through the sqlalchemy.engine logger",
    )

    @field_validator("driver", mode="before")
    @classmethod
    def validate_driver(cls, v: object) -> Dialect:
        """Map driver type aliases onto a supported dialect."""
        return Dialect.parse(v)  # type: ignore[arg-type]

    @field_validator("error_mode", mode="before")
    @classmethod
    def validate_error_mode(cls, v: object) -> object:
        """Accept error modes case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def dialect(self) -> Dialect:
        """Database dialect."""
        return self.driver

    @property
    def url(self) -> URL:
        """SQLAlchemy URL built from the configured parts."""
        if self.driver is Dialect.SQLITE:
            return URL.create(DRIVERNAMES[self.driver], database=self.database)

        return URL.create(
            DRIVERNAMES[self.driver],
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    @property
    def safe_url(self) -> str:
        """Connection URL with the password masked."""
        return self.url.render_as_string(hide_password=True)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "DatabaseConfig":
        """
        Load configuration from environment variables.

        A .env file is loaded first when present; variables already set in
        the environment win.

        Args:
            env_file: Optional path to a .env file

        Returns:
            Database configuration
        """
        load_dotenv(env_file)

        values: dict[str, object] = {
            "driver": os.getenv("DB_TYPE", ""),
            "host": os.getenv("DB_HOST", "localhost"),
            "database": os.getenv("DB_NAME", ""),
            "user": os.getenv("DB_USER"),
            "password": os.getenv("DB_PASSWORD"),
        }

        optional = {
            "port": os.getenv("DB_PORT"),
            "error_mode": os.getenv("DB_ERRORMODE"),
            "persistent": os.getenv("DB_PCONNECT"),
            "sql_error_log": os.getenv("DB_SQL_ERROR_LOG"),
            "fail_fast": os.getenv("DB_FAIL_FAST"),
            "echo_sql": os.getenv("DB_ECHO_SQL"),
        }
        values.update({key: value for key, value in optional.items() if value})

        config = cls(**values)  # type: ignore[arg-type]
        logger.info(f"Loaded database configuration for {config.safe_url}")
        return config

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "driver": "mysql",
                    "host": "localhost",
                    "database": "app",
                    "port": 3306,
                    "user": "app",
                    "password": "secret",
                    "error_mode": "silent",
                    "persistent": False,
                }
            ]
        }
    }
