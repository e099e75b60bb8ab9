"""Supported database dialects."""

from enum import Enum

from dblayer.exceptions import UnsupportedDialectError


class Dialect(str, Enum):
    """Closed set of database dialects the access layer can talk to."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def parse(cls, value: "str | Dialect") -> "Dialect":
        """
        Resolve a configured driver type to a dialect.

        Args:
            value: Driver type such as "mysql", "postgres" or "pgsql"

        Returns:
            Matching dialect

        Raises:
            UnsupportedDialectError: If the driver type is not supported
        """
        if isinstance(value, cls):
            return value

        name = str(value).strip().lower()
        # Strip a SQLAlchemy driver suffix, e.g. "mysql+pymysql"
        name = name.split("+")[0]

        dialect = _ALIASES.get(name)
        if dialect is None:
            raise UnsupportedDialectError(
                f"Unsupported database dialect: {value}. "
                f"Supported: {', '.join(sorted(_ALIASES))}"
            )
        return dialect


_ALIASES = {
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MYSQL,
    "postgres": Dialect.POSTGRESQL,
    "postgresql": Dialect.POSTGRESQL,
    "pgsql": Dialect.POSTGRESQL,
    "sqlite": Dialect.SQLITE,
}
