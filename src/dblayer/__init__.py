"""
dblayer - Relational database access layer

Owns one shared connection, runs complete SQL text against it with optional
result caching and failed-statement logging, and sweeps tables for
repair/optimize/analyze maintenance.
"""

__version__ = "1.0.0"

from .core import (
    CacheStore,
    ConnectionManager,
    ErrorLogger,
    MaintenanceRunner,
    MemoryCache,
    QueryExecutor,
)
from .exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    StatementError,
    UnsupportedDialectError,
)
from .models import DatabaseConfig, Dialect, ErrorMode, ErrorRecord, TableDescriptor

__all__ = [
    "CacheStore",
    "ConnectionManager",
    "DatabaseConfig",
    "DatabaseConnectionError",
    "DatabaseError",
    "Dialect",
    "ErrorLogger",
    "ErrorMode",
    "ErrorRecord",
    "MaintenanceRunner",
    "MemoryCache",
    "QueryExecutor",
    "StatementError",
    "TableDescriptor",
    "UnsupportedDialectError",
]
