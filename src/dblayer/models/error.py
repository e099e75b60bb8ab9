"""Failed statement record."""

import re
from datetime import datetime
from email.utils import format_datetime

from pydantic import BaseModel, Field


def normalize_query(query: str) -> str:
    """Flatten a statement onto one line for the error log."""
    flattened = re.sub(r"[\n\r]", " ", query)
    return re.sub(r"\s{2,}", " ", flattened)


class ErrorRecord(BaseModel):
    """One failed statement, as written to the SQL error log."""

    timestamp: datetime = Field(..., description="When the failure was recorded")
    message: str = Field(..., description="Driver error message")
    query: str = Field(..., description="Statement text collapsed onto one line")

    def to_log_lines(self) -> list[str]:
        """Render the record as the two lines appended to the log file."""
        stamp = format_datetime(self.timestamp)
        return [
            f"{stamp} - {self.message}",
            f"{stamp} - Query: {self.query}",
        ]
