"""Domain models for kv-facade."""

from kv_facade_core.models.entry import (
    ExecutionMode,
    ExistsMode,
    KeyValuePair,
    StoreValue,
)

__all__ = [
    "ExecutionMode",
    "ExistsMode",
    "KeyValuePair",
    "StoreValue",
]
