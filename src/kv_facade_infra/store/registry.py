"""Explicit registry of facades, one per execution mode and target address."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from kv_facade_core.constants import DEFERRED_INSTANCE_PREFIX, IMMEDIATE_INSTANCE_PREFIX
from kv_facade_core.models.entry import ExecutionMode
from kv_facade_infra.store.connection import create_redis
from kv_facade_infra.store.facade import KeyValueFacade

if TYPE_CHECKING:
    from kv_facade_core.config.settings import Settings
    from kv_facade_core.interfaces.store import StoreHandle

logger = structlog.get_logger()

HandleFactory = Callable[["Settings"], "StoreHandle"]


class ClientRegistry:
    """Hands out cached facades for the configured store.

    Pass one registry to the code that needs store access instead of
    reaching for process-wide state; tests build their own.
    """

    def __init__(
        self,
        settings: Settings,
        handle_factory: HandleFactory = create_redis,
    ) -> None:
        """Bind settings and the function that opens store handles."""
        self._settings = settings
        self._handle_factory = handle_factory
        self._instances: dict[str, KeyValueFacade] = {}
        # Committed deferred facades still own an open handle until aclose()
        self._retired: list[KeyValueFacade] = []

    def instance_key(self, mode: ExecutionMode) -> str:
        """Cache key for ``mode`` against the configured host and port."""
        if mode == ExecutionMode.DEFERRED:
            prefix = DEFERRED_INSTANCE_PREFIX
        else:
            prefix = IMMEDIATE_INSTANCE_PREFIX
        return f"{prefix}_{self._settings.redis_host}_{self._settings.redis_port}"

    def get_client(self) -> KeyValueFacade:
        """Return the immediate-mode facade, creating it on first use."""
        key = self.instance_key(ExecutionMode.IMMEDIATE)
        if key not in self._instances:
            self._instances[key] = self._build(ExecutionMode.IMMEDIATE)
        return self._instances[key]

    def get_multi_client(self) -> KeyValueFacade:
        """Return the deferred-mode facade; a committed one is replaced."""
        key = self.instance_key(ExecutionMode.DEFERRED)
        current = self._instances.get(key)
        if current is None or current.is_committed:
            if current is not None:
                self._retired.append(current)
                logger.debug("multi_client_replaced", instance=key)
            self._instances[key] = self._build(ExecutionMode.DEFERRED)
        return self._instances[key]

    async def aclose(self) -> None:
        """Close every cached and replaced facade, then forget them."""
        instances = [*self._retired, *self._instances.values()]
        self._retired.clear()
        self._instances.clear()
        for facade in instances:
            await facade.aclose()
        logger.debug("registry_closed", closed=len(instances))

    def _build(self, mode: ExecutionMode) -> KeyValueFacade:
        """Open a fresh handle and wrap it in a facade."""
        handle = self._handle_factory(self._settings)
        return KeyValueFacade(
            handle,
            mode=mode,
            chunk_size=self._settings.multi_set_chunk_size,
        )
