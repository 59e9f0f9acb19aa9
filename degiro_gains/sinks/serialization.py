"""JSON-ready conversion of report records."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable


def to_records(records: Iterable[Any]) -> list[dict]:
    """Convert a batch of records with :func:`to_dict`."""
    return [to_dict(record) for record in records]


def to_dict(obj: Any) -> dict:
    """Convert a record (dataclass or mapping) to a JSON-ready dictionary."""
    if is_dataclass(obj):
        return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, dict):
        return {key: serialize_value(value) for key, value in obj.items()}
    return {"value": serialize_value(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output.

    Amounts are written as strings so they keep their exact digits;
    dates, times and timestamps use ISO 8601.
    """
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if is_dataclass(value):
        return to_dict(value)
    if isinstance(value, dict):
        return {key: serialize_value(v) for key, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value
