"""Text query execution with caching and failure logging."""

import logging
from typing import Any, Optional

from sqlalchemy import CursorResult, String, literal
from sqlalchemy.exc import ResourceClosedError, SQLAlchemyError

from dblayer.adapters import execute_text
from dblayer.core.cache import TTL, CacheStore
from dblayer.core.connection import ConnectionManager
from dblayer.core.error_log import ErrorLogger, describe_error
from dblayer.exceptions import StatementError
from dblayer.models.config import ErrorMode
from dblayer.utils import convert_rows_to_json_safe

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class QueryExecutor:
    """Runs complete SQL text against the shared connection.

    query() never raises for a rejected statement: the failure goes to the
    SQL error log and an empty list is returned, the same value a query
    matching no rows gives. Connection failures are not absorbed.
    """

    def __init__(
        self,
        connection: ConnectionManager,
        cache: Optional[CacheStore] = None,
        error_log: Optional[ErrorLogger] = None,
    ):
        """
        Initialize query executor.

        Args:
            connection: Shared connection manager
            cache: Optional result cache consulted when use_cache is set
            error_log: Failed statement log, defaults to the configured file
        """
        self.connection = connection
        self.adapter = connection.adapter
        self.cache = cache
        self.error_log = error_log or ErrorLogger(connection.config.sql_error_log)

    def query(self, query: str, use_cache: bool = False, ttl: TTL = "") -> list[Row]:
        """
        Run a query and return all rows.

        Args:
            query: Complete SQL text
            use_cache: Look the exact text up in the cache first and store
                the rows afterwards
            ttl: Cache lifetime, interpreted by the cache

        Returns:
            Rows as dicts in column order; empty for no rows, empty text or
            a failed statement
        """
        if not query:
            return []

        cache = self.cache if use_cache else None
        if cache is not None and cache.enabled and cache.exists(query):
            cached = cache.fetch(query)
            if cached is not None and cached is not False:
                return cached

        try:
            with self.connection.lock:
                result = execute_text(self.connection.get_connection(), query)
                if not result.returns_rows:
                    return []
                rows = [dict(mapping) for mapping in result.mappings()]
        except SQLAlchemyError as e:
            self.error_log.record(describe_error(e), query)
            return []

        rows = convert_rows_to_json_safe(rows)

        if cache is not None and cache.enabled:
            cache.store(query, rows, ttl)

        return rows

    def query_one_row(
        self, query: str, use_cache: bool = False, ttl: TTL = ""
    ) -> Optional[Row]:
        """Run a query and return its first row, or None."""
        if not query:
            return None

        rows = self.query(query, use_cache, ttl)
        return rows[0] if rows else None

    def query_insert(self, query: str, return_last_id: bool = True) -> Any:
        """
        Run an INSERT through the dialect adapter.

        Args:
            query: INSERT statement text
            return_last_id: Return the generated id rather than the affected
                row count (dialects using RETURNING always give the id)

        Returns:
            Generated id, affected row count, or None on failure
        """
        if not query:
            return None

        try:
            with self.connection.lock:
                return self.adapter.insert(
                    self.connection.get_connection(), query, return_last_id
                )
        except SQLAlchemyError as e:
            return self._statement_failed(e, query)

    def query_direct(self, query: str) -> Optional[CursorResult]:
        """
        Run a statement and return the raw cursor result.

        No caching and no row conversion; read the handle with
        get_num_rows() and get_assoc_array().

        Returns:
            Cursor result, or None on empty text or failure
        """
        if not query:
            return None

        try:
            with self.connection.lock:
                return execute_text(self.connection.get_connection(), query)
        except SQLAlchemyError as e:
            return self._statement_failed(e, query)

    def escape_string(self, value: Any) -> str:
        """
        Quote a value as a SQL string literal for the connected dialect.

        Args:
            value: Value to quote; None quotes as an empty string

        Returns:
            Quoted literal including the surrounding quotes
        """
        text_value = "" if value is None else str(value)
        with self.connection.lock:
            dialect = self.connection.get_connection().dialect
        quoted = str(
            literal(text_value, String()).compile(
                dialect=dialect, compile_kwargs={"literal_binds": True}
            )
        )
        # pyformat dialects double "%" for driver substitution, which never
        # happens here: statements go to the cursor without parameters
        if dialect.identifier_preparer._double_percents:
            quoted = quoted.replace("%%", "%")
        return quoted

    def get_num_rows(self, handle: CursorResult) -> int:
        """Number of rows affected or matched by a statement handle."""
        return handle.rowcount

    def get_assoc_array(self, handle: CursorResult) -> Optional[Row]:
        """Fetch the next row of a statement handle as a dict, or None."""
        try:
            with self.connection.lock:
                row = handle.fetchone()
        except ResourceClosedError:
            return None
        return dict(row._mapping) if row is not None else None

    def _statement_failed(self, exc: SQLAlchemyError, query: str) -> None:
        message = describe_error(exc)
        mode = self.connection.config.error_mode

        if mode is ErrorMode.EXCEPTION:
            raise StatementError(message, query) from exc
        if mode is ErrorMode.WARNING:
            logger.warning(f"Statement failed: {message}")
        else:
            logger.debug(f"Statement failed: {message}")
        return None
