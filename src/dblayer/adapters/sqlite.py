"""SQLite adapter for embedded databases."""

from typing import Any

from dblayer.adapters.base import LastInsertIdAdapter
from dblayer.models.capabilities import DatabaseCapabilities
from dblayer.models.dialect import Dialect


class SQLiteAdapter(LastInsertIdAdapter):
    """SQLite adapter; ids come from the cursor like MySQL."""

    dialect = Dialect.SQLITE

    @property
    def capabilities(self) -> DatabaseCapabilities:
        """SQLite is always UTF-8 and has no per-table maintenance statements."""
        return DatabaseCapabilities(
            returning_clause=False,
            table_maintenance=False,
            session_charset=False,
        )

    @property
    def connect_args(self) -> dict[str, Any]:
        # The shared connection may be used from several threads under a lock
        return {"check_same_thread": False}
