"""Core database operations layer."""

from .cache import CacheStore, MemoryCache
from .connection import ConnectionManager
from .error_log import ErrorLogger
from .executor import QueryExecutor
from .maintenance import MaintenanceRunner

__all__ = [
    "CacheStore",
    "ConnectionManager",
    "ErrorLogger",
    "MaintenanceRunner",
    "MemoryCache",
    "QueryExecutor",
]
