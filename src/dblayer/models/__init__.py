"""Pydantic models for configuration and database metadata."""

from .capabilities import DatabaseCapabilities
from .config import DatabaseConfig, ErrorMode
from .dialect import Dialect
from .error import ErrorRecord, normalize_query
from .table import TableDescriptor, column_value

__all__ = [
    "DatabaseCapabilities",
    "DatabaseConfig",
    "Dialect",
    "ErrorMode",
    "ErrorRecord",
    "TableDescriptor",
    "column_value",
    "normalize_query",
]
