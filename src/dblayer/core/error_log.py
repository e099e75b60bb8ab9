"""Append-only log of failed SQL statements."""

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Union

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from dblayer.models.error import ErrorRecord, normalize_query

logger = logging.getLogger(__name__)


def describe_error(exc: SQLAlchemyError) -> str:
    """
    Build the log message for a driver error.

    Driver errors carrying (code, message) arguments, as MySQL drivers do,
    are rendered "<code> - <message>".
    """
    orig = exc.orig if isinstance(exc, DBAPIError) else None
    if orig is None:
        return str(exc).strip()

    args = getattr(orig, "args", ())
    if len(args) == 2 and isinstance(args[0], int):
        return f"{args[0]} - {args[1]}"
    return str(orig).strip()


class ErrorLogger:
    """Appends failed statements to a text log for humans to grep.

    Each failure writes two lines, the message and the query collapsed onto
    one line, both prefixed with an RFC 2822 timestamp.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def record(self, message: str, query: str) -> ErrorRecord:
        """
        Append one failure to the log.

        Args:
            message: Driver error message
            query: Statement text that failed

        Returns:
            The record that was written
        """
        record = ErrorRecord(
            timestamp=datetime.now().astimezone(),
            message=message,
            query=normalize_query(query),
        )

        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                for line in record.to_log_lines():
                    fh.write(line + "\n")

        logger.error(f"[Logged]: {record.message}")
        return record
