"""Guards for pattern-based deletion."""

from __future__ import annotations

from kv_facade_core.constants import MATCH_ALL_PATTERN
from kv_facade_core.exceptions import InvalidPatternError


def validate_delete_pattern(pattern: object) -> str:
    """Return ``pattern`` if it is a string other than the bare wildcard."""
    if not isinstance(pattern, str) or pattern == MATCH_ALL_PATTERN:
        raise InvalidPatternError(pattern)
    return pattern


def validate_delete_patterns(patterns: object) -> list[str]:
    """Validate a list or tuple of delete patterns as a whole.

    One bad entry rejects the entire call.
    """
    if not isinstance(patterns, list | tuple):
        raise InvalidPatternError(patterns)
    for pattern in patterns:
        if not isinstance(pattern, str) or pattern == MATCH_ALL_PATTERN:
            raise InvalidPatternError(patterns)
    return list(patterns)
