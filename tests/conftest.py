"""Pytest configuration and shared fixtures for database tests"""

import os
from pathlib import Path
from typing import Generator, Optional

import pytest
from dotenv import load_dotenv

from dblayer.core import ConnectionManager, ErrorLogger, MemoryCache, QueryExecutor
from dblayer.models.config import DatabaseConfig

# Load environment variables
load_dotenv()


# ==================== Configuration Fixtures ====================


@pytest.fixture(scope="session")
def mysql_database_url() -> Optional[str]:
    """MySQL test database URL from environment"""
    return os.getenv("MYSQL_TEST_DATABASE_URL")


@pytest.fixture
def error_log_path(tmp_path: Path) -> Path:
    """Location of the SQL error log for one test"""
    return tmp_path / "logs" / "sql_errors.log"


@pytest.fixture
def sqlite_config(tmp_path: Path, error_log_path: Path) -> DatabaseConfig:
    """SQLite file database configuration"""
    return DatabaseConfig(
        driver="sqlite",
        database=str(tmp_path / "test.db"),
        sql_error_log=str(error_log_path),
    )


# ==================== SQLite Fixtures ====================


@pytest.fixture
def sqlite_connection(
    sqlite_config: DatabaseConfig,
) -> Generator[ConnectionManager, None, None]:
    """SQLite connection manager with proper cleanup"""
    manager = ConnectionManager(sqlite_config)
    try:
        yield manager
    finally:
        manager.close()


@pytest.fixture
def memory_cache() -> MemoryCache:
    """Empty enabled cache"""
    return MemoryCache()


@pytest.fixture
def sqlite_executor(
    sqlite_connection: ConnectionManager, memory_cache: MemoryCache
) -> QueryExecutor:
    """Query executor over SQLite with an in-memory cache"""
    return QueryExecutor(
        sqlite_connection,
        cache=memory_cache,
        error_log=ErrorLogger(sqlite_connection.config.sql_error_log),
    )


@pytest.fixture
def users_table(sqlite_executor: QueryExecutor) -> str:
    """A small users table with two rows"""
    sqlite_executor.query_direct(
        "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL)"
    )
    sqlite_executor.query_insert("INSERT INTO users (name) VALUES ('ada')")
    sqlite_executor.query_insert("INSERT INTO users (name) VALUES ('grace')")
    return "users"


# ==================== Pytest Configuration ====================


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "mysql: MySQL-specific tests")
    config.addinivalue_line("markers", "postgresql: PostgreSQL-specific tests")
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring database"
    )
