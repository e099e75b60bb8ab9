"""Table metadata used by the maintenance sweep."""

from typing import Any, Optional

from pydantic import BaseModel, Field


def column_value(row: dict[str, Any], column: str) -> Any:
    """
    Read a column from a result row, ignoring the case of the column name.

    MySQL 8 reports information_schema columns in upper case while older
    servers use lower case.
    """
    if column in row:
        return row[column]

    lowered = column.lower()
    for key, value in row.items():
        if key.lower() == lowered:
            return value
    return None


class TableDescriptor(BaseModel):
    """Storage metadata for one table."""

    name: str = Field(..., description="Table name")
    engine: Optional[str] = Field(None, description="Storage engine")
    has_free_space: bool = Field(
        default=False, description="Whether the table reports reclaimable space"
    )

    @classmethod
    def from_status_row(cls, row: dict[str, Any]) -> "TableDescriptor":
        """Build a descriptor from a SHOW TABLE STATUS row."""
        data_free = column_value(row, "Data_free")
        return cls(
            name=str(column_value(row, "Name")),
            engine=column_value(row, "Engine"),
            has_free_space=bool(int(data_free or 0)),
        )
