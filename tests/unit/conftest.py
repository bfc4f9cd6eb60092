"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from kv_facade_core.config.settings import Settings
from kv_facade_core.models.entry import ExecutionMode
from kv_facade_infra.store.facade import KeyValueFacade
from tests.mocks.mock_settings import make_settings
from tests.mocks.mock_store import FakeRedis


@pytest.fixture
def settings() -> Settings:
    """Return Settings isolated from the developer's environment."""
    return make_settings()


@pytest.fixture
def server() -> dict[str, str]:
    """Backing data shared by every fake handle in one test."""
    return {}


@pytest.fixture
def store(server: dict[str, str]) -> FakeRedis:
    """Fake handle used by the immediate-mode facade."""
    return FakeRedis(server)


@pytest.fixture
def facade(store: FakeRedis) -> KeyValueFacade:
    """Immediate-mode facade with the default chunk size."""
    return KeyValueFacade(store, mode=ExecutionMode.IMMEDIATE)


@pytest.fixture
def deferred_store(server: dict[str, str]) -> FakeRedis:
    """Second fake handle on the same data, used by the deferred facade."""
    return FakeRedis(server)


@pytest.fixture
def deferred(deferred_store: FakeRedis) -> KeyValueFacade:
    """Deferred-mode facade sharing data with ``facade``."""
    return KeyValueFacade(deferred_store, mode=ExecutionMode.DEFERRED)


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Restore root logger handlers replaced by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
