"""Shared database connection management with SQLAlchemy."""

import logging
import threading
from typing import Any, Optional

from sqlalchemy import Connection, Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from dblayer.adapters import BaseAdapter, create_adapter, execute_text
from dblayer.exceptions import DatabaseConnectionError
from dblayer.models.config import DatabaseConfig
from dblayer.models.dialect import Dialect

logger = logging.getLogger(__name__)

FATAL_CONNECT_MESSAGE = "fatal error: could not connect to database! Check your config."


class ConnectionManager:
    """Owns the single shared connection to the database.

    The connection is opened at most once, either explicitly through
    connect() or lazily by get_connection(), and is never rebuilt. Every
    statement runs in autocommit mode.
    """

    def __init__(self, config: DatabaseConfig):
        """
        Initialize the connection manager.

        Args:
            config: Database configuration
        """
        self.config = config
        self.engine: Optional[Engine] = None
        self._adapter = create_adapter(config.dialect)
        self._connection: Optional[Connection] = None
        self._closed = False
        self._init_lock = threading.Lock()
        # Serializes execute/fetch on the shared connection
        self.lock = threading.RLock()

    def _engine_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "isolation_level": "AUTOCOMMIT",
            "echo": self.config.echo_sql,
        }
        if not self.config.persistent:
            options["poolclass"] = NullPool
        if self._adapter.connect_args:
            options["connect_args"] = self._adapter.connect_args
        return options

    def connect(self) -> Connection:
        """
        Establish the shared connection if it is not open yet.

        Returns:
            The shared connection

        Raises:
            DatabaseConnectionError: If the connection cannot be established
        """
        with self._init_lock:
            if self._connection is not None:
                return self._connection
            if self._closed:
                raise DatabaseConnectionError("Connection manager has been closed")

            engine: Optional[Engine] = None
            conn: Optional[Connection] = None
            try:
                engine = create_engine(self.config.url, **self._engine_options())
                conn = engine.connect()
                init_statement = self._adapter.session_init_statement
                if init_statement:
                    execute_text(conn, init_statement)
            except (SQLAlchemyError, ImportError) as e:
                if conn is not None:
                    conn.close()
                if engine is not None:
                    engine.dispose()
                raise DatabaseConnectionError(
                    f"Could not connect to {self.config.safe_url}: {e}"
                ) from e

            self.engine = engine
            self._connection = conn
            logger.info(f"Connected to {self.config.safe_url}")
            return conn

    def get_connection(self) -> Connection:
        """
        Get the shared connection, connecting on first use.

        When the lazy connect fails and the configuration asks to fail fast,
        the process is terminated.

        Returns:
            The shared connection

        Raises:
            SystemExit: If connecting fails and fail_fast is set
            DatabaseConnectionError: If connecting fails and fail_fast is off,
                or the manager has been closed
        """
        conn = self._connection
        if conn is not None:
            return conn
        if self._closed:
            raise DatabaseConnectionError("Connection manager has been closed")

        try:
            return self.connect()
        except DatabaseConnectionError as e:
            if not self.config.fail_fast:
                raise
            logger.critical(f"{FATAL_CONNECT_MESSAGE} {e}")
            raise SystemExit(f"{FATAL_CONNECT_MESSAGE} {e}") from e

    def close(self) -> None:
        """Close the shared connection; the manager will not reconnect."""
        with self._init_lock:
            self._closed = True
            if self._connection is not None:
                self._connection.close()
                self._connection = None
            if self.engine is not None:
                self.engine.dispose()
                self.engine = None

    @property
    def adapter(self) -> BaseAdapter:
        """Adapter for the configured dialect."""
        return self._adapter

    @property
    def dialect(self) -> Dialect:
        """Configured database dialect."""
        return self.config.dialect

    @property
    def is_connected(self) -> bool:
        """Check if the shared connection is open."""
        return self._connection is not None

    def __enter__(self) -> "ConnectionManager":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
