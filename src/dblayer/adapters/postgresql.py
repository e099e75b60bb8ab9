"""PostgreSQL adapter."""

from typing import Any

from sqlalchemy import Connection

from dblayer.adapters.base import BaseAdapter, execute_text
from dblayer.models.capabilities import DatabaseCapabilities
from dblayer.models.dialect import Dialect


class PostgresAdapter(BaseAdapter):
    """PostgreSQL adapter using RETURNING for generated ids."""

    dialect = Dialect.POSTGRESQL

    @property
    def capabilities(self) -> DatabaseCapabilities:
        """PostgreSQL reports ids via RETURNING; no MySQL-style maintenance."""
        return DatabaseCapabilities(
            returning_clause=True,
            table_maintenance=False,
            session_charset=True,
        )

    @property
    def session_init_statement(self) -> str:
        return "SET client_encoding TO 'UTF8'"

    def insert(self, conn: Connection, query: str, return_last_id: bool) -> Any:
        """
        Append RETURNING id and return the generated id.

        The id is returned whatever return_last_id says, since the
        statement itself produces it.
        """
        result = execute_text(conn, f"{query} RETURNING id")
        return result.scalar()
