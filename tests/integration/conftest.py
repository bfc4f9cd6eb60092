"""Integration test fixtures: a real Redis on localhost:6379, database 1."""

from __future__ import annotations

import logging
import socket
import time
from collections.abc import AsyncGenerator, Generator

import pytest

from kv_facade_core.config.settings import Settings
from kv_facade_infra.store.connection import create_redis
from kv_facade_infra.store.registry import ClientRegistry
from tests.mocks.mock_settings import make_settings

# ---------------------------------------------------------------------------
# Service health check (with retry for CI container start-up)
# ---------------------------------------------------------------------------


def _tcp_reachable(
    host: str,
    port: int,
    timeout: float = 1.0,
    retries: int = 10,
    delay: float = 2.0,
) -> bool:
    """Check if a TCP service is reachable, retrying on failure."""
    for attempt in range(retries):
        try:
            with socket.create_connection((host, port), timeout=timeout):
                return True
        except OSError:
            if attempt < retries - 1:
                time.sleep(delay)
    return False


_redis_up = _tcp_reachable("localhost", 6379, retries=3, delay=1.0)

skip_no_redis = pytest.mark.skipif(
    not _redis_up,
    reason="Redis not reachable on localhost:6379",
)


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def redis_settings() -> Settings:
    """Settings for the test database with a small chunk size."""
    return make_settings(redis_db=1, multi_set_chunk_size=3)


@pytest.fixture
async def registry(redis_settings: Settings) -> AsyncGenerator[ClientRegistry, None]:
    """Registry on test DB 1, flushed before and after each test."""
    if not _redis_up:
        pytest.skip("Redis not available")

    admin = create_redis(redis_settings)
    await admin.flushdb()
    reg = ClientRegistry(redis_settings)
    yield reg
    await reg.aclose()
    await admin.flushdb()
    await admin.aclose()


# ---------------------------------------------------------------------------
# Logging cleanup
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Save and restore root logger handlers."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
