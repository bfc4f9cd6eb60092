"""Tests for key-value and mode models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kv_facade_core.models.entry import ExecutionMode, ExistsMode, KeyValuePair


@pytest.mark.unit
class TestKeyValuePair:
    """Test KeyValuePair validation and coercion."""

    def test_coerce_from_mapping(self) -> None:
        """A {key, value} dict becomes a model."""
        pair = KeyValuePair.coerce({"key": "user:1", "value": "alice"})
        assert pair.key == "user:1"
        assert pair.value == "alice"

    def test_coerce_passes_models_through(self) -> None:
        """An existing model is returned unchanged."""
        pair = KeyValuePair(key="k", value=3)
        assert KeyValuePair.coerce(pair) is pair

    def test_empty_key_rejected(self) -> None:
        """Keys must be non-empty."""
        with pytest.raises(ValidationError):
            KeyValuePair(key="", value="v")

    def test_missing_value_rejected(self) -> None:
        """A mapping without a value is invalid."""
        with pytest.raises(ValidationError):
            KeyValuePair.coerce({"key": "k"})

    def test_frozen(self) -> None:
        """Pairs are immutable once built."""
        pair = KeyValuePair(key="k", value="v")
        with pytest.raises(ValidationError):
            pair.key = "other"  # type: ignore[misc]


@pytest.mark.unit
class TestEnums:
    """Test string-valued enums."""

    def test_execution_mode_values(self) -> None:
        """Modes compare equal to their string names."""
        assert ExecutionMode("deferred") is ExecutionMode.DEFERRED
        assert ExecutionMode.IMMEDIATE == "immediate"

    def test_exists_mode_rejects_unknown(self) -> None:
        """Unknown quantifiers raise ValueError."""
        with pytest.raises(ValueError):
            ExistsMode("SOME")
