"""Execution adapter: one ``execute`` contract for immediate and deferred modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog
from redis.exceptions import RedisError

from kv_facade_core.constants import STATUS_QUEUED
from kv_facade_core.exceptions import (
    NotInTransactionModeError,
    StoreCommandError,
    TransactionClosedError,
)
from kv_facade_core.models.entry import ExecutionMode

if TYPE_CHECKING:
    from kv_facade_core.interfaces.store import StoreHandle, TransactionBuffer

logger = structlog.get_logger()

# Transport failures surface as OSError subclasses (timeouts, resets)
_STORE_ERRORS: tuple[type[BaseException], ...] = (RedisError, OSError)


@dataclass(frozen=True)
class Immediate:
    """Every command runs against the store handle as soon as it is issued."""

    mode: ExecutionMode = field(default=ExecutionMode.IMMEDIATE, init=False)


@dataclass
class Deferred:
    """Commands queue on ``buffer`` until committed."""

    buffer: TransactionBuffer
    spent: bool = False
    mode: ExecutionMode = field(default=ExecutionMode.DEFERRED, init=False)


Execution = Immediate | Deferred


class CommandExecutor:
    """Dispatch store verbs according to the bound execution mode."""

    def __init__(self, handle: StoreHandle, mode: ExecutionMode) -> None:
        """Bind the handle; deferred mode creates its buffer once, here."""
        self._handle = handle
        self._execution: Execution
        if mode == ExecutionMode.DEFERRED:
            self._execution = Deferred(buffer=handle.pipeline(transaction=True))
        else:
            self._execution = Immediate()

    @property
    def mode(self) -> ExecutionMode:
        """Execution mode fixed at construction."""
        return self._execution.mode

    @property
    def is_spent(self) -> bool:
        """True once a deferred buffer has been committed."""
        return isinstance(self._execution, Deferred) and self._execution.spent

    async def execute(self, command: str, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        """Run ``command`` now, or queue it and return the ``QUEUED`` placeholder."""
        execution = self._execution
        if isinstance(execution, Deferred):
            if execution.spent:
                raise TransactionClosedError(
                    f"Cannot queue {command!r}: transaction already committed"
                )
            try:
                getattr(execution.buffer, command)(*args, **kwargs)
            except _STORE_ERRORS as exc:
                logger.error(
                    "store_command_failed", command=command, mode="deferred", error=str(exc)
                )
                raise StoreCommandError(command, exc) from exc
            return STATUS_QUEUED
        return await self.direct(command, *args, **kwargs)

    async def direct(self, command: str, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        """Run ``command`` against the handle, bypassing any transaction buffer."""
        try:
            return await getattr(self._handle, command)(*args, **kwargs)
        except _STORE_ERRORS as exc:
            logger.error("store_command_failed", command=command, error=str(exc))
            raise StoreCommandError(command, exc) from exc

    async def commit(self) -> list[Any]:
        """Apply the queued commands atomically, in enqueue order."""
        execution = self._execution
        if not isinstance(execution, Deferred):
            raise NotInTransactionModeError("The instance was not initialized in deferred mode")
        if execution.spent:
            raise TransactionClosedError("Transaction already committed")

        # Spent even on failure: redis-py resets the pipeline either way
        execution.spent = True
        try:
            results: list[Any] = await execution.buffer.execute()
        except _STORE_ERRORS as exc:
            logger.error("multi_commit_failed", error=str(exc))
            raise StoreCommandError("exec", exc) from exc

        logger.info("multi_committed", commands=len(results))
        return results
