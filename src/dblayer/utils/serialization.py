"""JSON serialization utilities using orjson for speed and correctness.

orjson handles most database types automatically and correctly:
- datetime, date, time → ISO format
- UUID → string
- dataclasses, pydantic models → dict

Rows are normalized through here before they are returned or cached, so a
cache round trip gives back exactly what the first execution returned.
"""

import base64
import datetime
from typing import Any

import orjson


def _default_handler(obj: Any) -> Any:
    """
    Custom default handler for types orjson doesn't handle natively.

    Args:
        obj: Object to serialize

    Returns:
        JSON-serializable representation

    Raises:
        TypeError: If object cannot be serialized
    """
    # timedelta - convert to total seconds
    if isinstance(obj, datetime.timedelta):
        return obj.total_seconds()

    # bytes/bytearray/memoryview - try UTF-8 decode, fall back to base64
    if isinstance(obj, (bytes, bytearray, memoryview)):
        data = bytes(obj)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return base64.b64encode(data).decode("ascii")

    if isinstance(obj, set):
        return list(obj)

    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def convert_value_to_json_safe(value: Any) -> Any:
    """
    Convert a value to JSON-serializable format.

    Uses orjson's serialization and decodes back to Python objects, so the
    result is exactly what a serialized copy would decode to.

    Args:
        value: Value to convert

    Returns:
        JSON-serializable value
    """
    if value is None or isinstance(value, (str, bool)):
        return value
    # orjson only takes 64-bit integers; larger ones fall through to str()
    if isinstance(value, int) and -(2**63) <= value < 2**64:
        return value

    try:
        return orjson.loads(orjson.dumps(value, default=_default_handler))
    except TypeError:
        # Decimal and anything else orjson refuses is kept as text
        return str(value)


def convert_row_to_json_safe(row: dict[str, Any]) -> dict[str, Any]:
    """
    Convert all values in a row dict to JSON-serializable formats.

    Args:
        row: Dictionary representing a database row

    Returns:
        Dictionary with JSON-serializable values, keys in the original order
    """
    return {key: convert_value_to_json_safe(value) for key, value in row.items()}


def convert_rows_to_json_safe(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Convert all rows to JSON-serializable format.

    Args:
        rows: List of row dictionaries

    Returns:
        List of dictionaries with JSON-serializable values
    """
    return [convert_row_to_json_safe(row) for row in rows]


def dumps(obj: Any) -> bytes:
    """Serialize object to JSON bytes using orjson."""
    return orjson.dumps(obj, default=_default_handler)


def loads(data: bytes) -> Any:
    """Deserialize JSON bytes produced by dumps()."""
    return orjson.loads(data)
