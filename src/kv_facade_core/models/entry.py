"""Key-value pair and execution mode models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBytes, StrictFloat, StrictInt, StrictStr

# Value types the store accepts on the raw (non-JSON) path
StoreValue = str | bytes | int | float


class ExecutionMode(StrEnum):
    """How a facade dispatches commands for its whole lifetime."""

    IMMEDIATE = "immediate"
    DEFERRED = "deferred"


class ExistsMode(StrEnum):
    """Quantifier applied to per-key existence results."""

    ALL = "ALL"
    ANY = "ANY"
    RAW = "RAW"


class KeyValuePair(BaseModel):
    """A single key and its raw value, as written by bulk operations."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1, description="Non-empty store key")
    # Strict: no bool-to-int or other lax coercion on the bulk path
    value: StrictStr | StrictBytes | StrictInt | StrictFloat = Field(
        description="Raw value written as-is"
    )

    @classmethod
    def coerce(cls, item: KeyValuePair | dict[str, Any]) -> KeyValuePair:
        """Accept either a model instance or a ``{"key", "value"}`` mapping."""
        if isinstance(item, KeyValuePair):
            return item
        return cls.model_validate(item)
