"""
JSON-подобная модель данных и путевые запросы к ней.
"""

from __future__ import annotations

from .load import DataLoadError, load_data
from .model import (
    JsonValue,
    ValueKind,
    is_present,
    is_record,
    is_string,
    kind_of,
    remove_field,
    set_field,
    to_bool,
    to_text,
)
from .query import Query

__all__ = [
    "DataLoadError",
    "JsonValue",
    "Query",
    "ValueKind",
    "is_present",
    "is_record",
    "is_string",
    "kind_of",
    "load_data",
    "remove_field",
    "set_field",
    "to_bool",
    "to_text",
]
