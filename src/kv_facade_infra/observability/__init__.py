"""Observability: structured logging."""

from kv_facade_infra.observability.logging import (
    bind_session_context,
    clear_session_context,
    configure_logging,
)

__all__ = [
    "bind_session_context",
    "clear_session_context",
    "configure_logging",
]
