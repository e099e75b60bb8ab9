"""Database adapters for specific database implementations."""

from .base import BaseAdapter, LastInsertIdAdapter, execute_text
from .mysql import MySQLAdapter
from .postgresql import PostgresAdapter
from .sqlite import SQLiteAdapter
from ..models.dialect import Dialect

__all__ = [
    "BaseAdapter",
    "LastInsertIdAdapter",
    "MySQLAdapter",
    "PostgresAdapter",
    "SQLiteAdapter",
    "create_adapter",
    "execute_text",
]

_ADAPTERS: dict[Dialect, type[BaseAdapter]] = {
    Dialect.MYSQL: MySQLAdapter,
    Dialect.POSTGRESQL: PostgresAdapter,
    Dialect.SQLITE: SQLiteAdapter,
}


def create_adapter(dialect: "Dialect | str") -> BaseAdapter:
    """
    Factory function to create the adapter for a dialect.

    Args:
        dialect: Dialect or driver type name

    Returns:
        Database adapter instance

    Raises:
        UnsupportedDialectError: If the dialect is not supported
    """
    return _ADAPTERS[Dialect.parse(dialect)]()
