"""Database capabilities model."""

from pydantic import BaseModel, Field


class DatabaseCapabilities(BaseModel):
    """Flags indicating what features a database supports."""

    returning_clause: bool = Field(
        default=False,
        description="Inserts report generated ids through a RETURNING clause",
    )
    table_maintenance: bool = Field(
        default=False,
        description="Supports SHOW TABLE STATUS and REPAIR/OPTIMIZE/ANALYZE TABLE",
    )
    session_charset: bool = Field(
        default=False,
        description="Character encoding is fixed by a session statement on connect",
    )

    def get_supported_features(self) -> list[str]:
        """Get list of supported feature names."""
        return [
            field_name
            for field_name, field_value in self.model_dump().items()
            if field_value is True
        ]
