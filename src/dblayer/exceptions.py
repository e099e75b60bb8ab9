"""Exception hierarchy for the database access layer."""

from typing import Optional


class DatabaseError(Exception):
    """Base class for errors raised by dblayer."""


class DatabaseConnectionError(DatabaseError):
    """The shared connection could not be established."""


class StatementError(DatabaseError):
    """A statement was rejected by the database driver."""

    def __init__(self, message: str, query: Optional[str] = None):
        super().__init__(message)
        self.query = query


class UnsupportedDialectError(DatabaseError, ValueError):
    """The configured driver type does not map to a supported dialect."""
