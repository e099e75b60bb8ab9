"""MySQL adapter."""

from dblayer.adapters.base import LastInsertIdAdapter
from dblayer.models.capabilities import DatabaseCapabilities
from dblayer.models.dialect import Dialect


class MySQLAdapter(LastInsertIdAdapter):
    """MySQL/MariaDB adapter with table maintenance support."""

    dialect = Dialect.MYSQL

    @property
    def capabilities(self) -> DatabaseCapabilities:
        """MySQL has no RETURNING clause but supports table maintenance."""
        return DatabaseCapabilities(
            returning_clause=False,
            table_maintenance=True,
            session_charset=True,
        )

    @property
    def session_init_statement(self) -> str:
        return "SET NAMES utf8"

    def quote_identifier(self, name: str) -> str:
        """Quote a name with backticks."""
        return "`" + name.replace("`", "``") + "`"
