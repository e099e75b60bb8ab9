"""Base adapter abstract class for dialect-specific behaviour."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy import Connection, CursorResult

from dblayer.models.capabilities import DatabaseCapabilities
from dblayer.models.dialect import Dialect


def execute_text(conn: Connection, query: str) -> CursorResult:
    """
    Execute raw statement text on a connection.

    The text goes to the DBAPI cursor untouched: no bind parameter parsing,
    and no parameter collection, so literal '%' and ':name' survive.

    Args:
        conn: Open connection
        query: Complete SQL statement

    Returns:
        Cursor result of the statement
    """
    return conn.exec_driver_sql(query, execution_options={"no_parameters": True})


class BaseAdapter(ABC):
    """Base adapter defining the dialect-specific interface."""

    dialect: Dialect

    @property
    @abstractmethod
    def capabilities(self) -> DatabaseCapabilities:
        """Get capabilities for this database type."""
        ...

    @property
    def session_init_statement(self) -> Optional[str]:
        """Statement run once after connecting to fix the character encoding."""
        return None

    @property
    def connect_args(self) -> dict[str, Any]:
        """Extra keyword arguments passed to the DBAPI connect()."""
        return {}

    @abstractmethod
    def insert(self, conn: Connection, query: str, return_last_id: bool) -> Any:
        """
        Execute an INSERT and report its outcome.

        Args:
            conn: Open connection
            query: INSERT statement text
            return_last_id: Return the generated id instead of the raw outcome

        Returns:
            Generated id or affected row count
        """
        ...

    def quote_identifier(self, name: str) -> str:
        """Quote a table or column name."""
        return '"' + name.replace('"', '""') + '"'


class LastInsertIdAdapter(BaseAdapter):
    """Adapter for engines that report generated ids on the cursor."""

    def insert(self, conn: Connection, query: str, return_last_id: bool) -> Any:
        """Execute directly, then read lastrowid or rowcount from the cursor."""
        result = execute_text(conn, query)
        if return_last_id:
            return result.lastrowid
        return result.rowcount
