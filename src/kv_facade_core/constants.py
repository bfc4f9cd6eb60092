"""Shared constants for kv-facade."""

from __future__ import annotations

# Store limits bulk commands well above this; 5000 keeps one round-trip small
DEFAULT_CHUNK_SIZE = 5000

# Pattern that matches every key; never accepted by the delete-by-pattern path
MATCH_ALL_PATTERN = "*"

STATUS_OK = "OK"
STATUS_QUEUED = "QUEUED"

# Registry cache key prefixes, one facade per mode and target address
IMMEDIATE_INSTANCE_PREFIX = "single"
DEFERRED_INSTANCE_PREFIX = "multi"
