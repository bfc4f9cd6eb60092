"""KeyValueFacade: uniform immediate/deferred access to the key-value store."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from kv_facade_core.constants import DEFAULT_CHUNK_SIZE, STATUS_OK, STATUS_QUEUED
from kv_facade_core.exceptions import InvalidKeyError, StoreCommandError, ValueDecodeError
from kv_facade_core.models.entry import ExecutionMode, ExistsMode, KeyValuePair, StoreValue
from kv_facade_infra.store.batching import batch_execute
from kv_facade_infra.store.execution import CommandExecutor
from kv_facade_infra.store.patterns import validate_delete_pattern, validate_delete_patterns

if TYPE_CHECKING:
    from kv_facade_core.interfaces.store import StoreHandle

logger = structlog.get_logger()

_RAW_VALUE_TYPES = (str, bytes, int, float)


class KeyValueFacade:
    """Facade over a store handle bound to one execution mode for its lifetime.

    In immediate mode every call runs against the store and returns its
    result. In deferred mode writes and reads are queued on a transaction
    buffer and return ``"QUEUED"`` until :meth:`exec_multi` commits them.
    Key listing and existence checks always read committed state.
    """

    def __init__(
        self,
        handle: StoreHandle,
        mode: ExecutionMode | str = ExecutionMode.IMMEDIATE,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Bind the handle and mode; deferred mode opens its transaction buffer here."""
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
            msg = f"chunk_size must be a positive integer, got {chunk_size!r}"
            raise ValueError(msg)
        self._handle = handle
        self._chunk_size = chunk_size
        self._executor = CommandExecutor(handle, ExecutionMode(mode))
        logger.info("facade_initialized", mode=str(self.mode), chunk_size=chunk_size)

    @property
    def mode(self) -> ExecutionMode:
        """Execution mode fixed at construction."""
        return self._executor.mode

    @property
    def is_deferred(self) -> bool:
        """True when commands queue until :meth:`exec_multi`."""
        return self.mode == ExecutionMode.DEFERRED

    @property
    def is_committed(self) -> bool:
        """True once the deferred transaction has been committed."""
        return self._executor.is_spent

    @property
    def chunk_size(self) -> int:
        """Maximum pairs or keys per bulk round-trip."""
        return self._chunk_size

    # ------------------------------------------------------------------
    # Single values
    # ------------------------------------------------------------------

    async def set_value(self, key: str, value: StoreValue) -> str:
        """Store a raw value under ``key``."""
        _check_key(key)
        _check_value(value)
        result = await self._executor.execute("set", key, value)
        return self._status(result)

    async def get_value(self, key: str) -> Any:  # noqa: ANN401
        """Return the value at ``key``, ``None`` if absent, or the queued placeholder."""
        _check_key(key)
        return await self._executor.execute("get", key)

    async def set_json_value(self, key: str, value: Any) -> str:  # noqa: ANN401
        """Serialize ``value`` to JSON and store it as a string."""
        _check_key(key)
        await self._executor.execute("set", key, json.dumps(value))
        return STATUS_OK

    async def get_json_value(self, key: str, *, strict: bool = False) -> Any:  # noqa: ANN401
        """Read and decode the JSON value at ``key``.

        By default an absent key, malformed JSON and store failures all
        collapse into ``{}``. With ``strict=True`` an absent key returns
        ``None``, malformed data raises :class:`ValueDecodeError` and store
        failures propagate as :class:`StoreCommandError`.
        """
        _check_key(key)
        try:
            raw = await self._executor.execute("get", key)
        except StoreCommandError as exc:
            if strict:
                raise
            logger.warning("json_read_failed", key=key, error=str(exc.cause))
            return {}

        if self.is_deferred and strict:
            return raw
        if raw is None:
            if strict:
                return None
            logger.warning("json_key_missing", key=key)
            return {}

        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            if strict:
                raise ValueDecodeError(key, exc) from exc
            logger.warning("json_decode_failed", key=key, error=str(exc))
            return {}

    # ------------------------------------------------------------------
    # Bulk values
    # ------------------------------------------------------------------

    async def set_values(self, pairs: Sequence[KeyValuePair | dict[str, Any]]) -> str:
        """Write every pair, one ``mset`` per chunk, chunks in order.

        Not atomic across chunks: if chunk N fails, chunks before it stay
        written and the error propagates.
        """
        items = _coerce_pairs(pairs)

        async def write_chunk(chunk: Sequence[KeyValuePair]) -> None:
            await self._executor.execute("mset", {pair.key: pair.value for pair in chunk})

        result = await batch_execute(items, self._chunk_size, write_chunk)
        logger.debug("values_set", pairs=len(items), mode=str(self.mode))
        return result

    async def get_values(self, keys: Sequence[str]) -> Any:  # noqa: ANN401
        """Return the values for ``keys`` in order, ``None`` for missing ones.

        An empty ``keys`` returns ``[]`` without a round-trip in both modes;
        nothing is queued in deferred mode.
        """
        for key in keys:
            _check_key(key)
        if not keys:
            return []
        return await self._executor.execute("mget", list(keys))

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    async def get_keys_by_pattern(self, pattern: str) -> Any:  # noqa: ANN401
        """List keys matching a glob pattern."""
        return await self._executor.execute("keys", pattern)

    async def delete_by_pattern(self, pattern: str) -> str:
        """Delete every key matching ``pattern``; the bare wildcard is refused."""
        validate_delete_pattern(pattern)
        matches = await self._executor.direct("keys", pattern)
        return await self._delete_keys(list(matches), patterns=[pattern])

    async def delete_by_patterns(self, patterns: Sequence[str]) -> str:
        """Delete keys matching any of ``patterns``.

        Matches are concatenated in pattern order without de-duplication.
        """
        checked = validate_delete_patterns(patterns)
        matches: list[str] = []
        for pattern in checked:
            matches.extend(await self._executor.direct("keys", pattern))
        return await self._delete_keys(matches, patterns=checked)

    async def _delete_keys(self, keys: list[str], *, patterns: list[str]) -> str:
        """Delete ``keys`` in chunks through the execution adapter."""

        async def delete_chunk(chunk: Sequence[str]) -> None:
            await self._executor.execute("delete", *chunk)

        result = await batch_execute(keys, self._chunk_size, delete_chunk)
        logger.info("keys_deleted", patterns=patterns, keys=len(keys), mode=str(self.mode))
        return result

    # ------------------------------------------------------------------
    # Existence
    # ------------------------------------------------------------------

    async def check_exists(self, quantifier: ExistsMode | str, *keys: str) -> bool | list[bool]:
        """Check each key and reduce the results by ``quantifier``.

        ``ALL`` and ``ANY`` return a single bool; ``RAW`` returns one bool
        per key in input order.
        """
        mode = ExistsMode(quantifier.upper() if isinstance(quantifier, str) else quantifier)
        for key in keys:
            _check_key(key)

        found: list[bool] = []
        for key in keys:
            found.append(bool(await self._executor.direct("exists", key)))

        if mode == ExistsMode.ALL:
            return all(found)
        if mode == ExistsMode.ANY:
            return any(found)
        return found

    # ------------------------------------------------------------------
    # Whole store / transaction
    # ------------------------------------------------------------------

    async def flushall(self) -> str:
        """Remove every key in every database. Not guarded; use deliberately."""
        result = await self._executor.execute("flushall")
        logger.warning("store_flushed", mode=str(self.mode))
        return self._status(result)

    async def exec_multi(self) -> list[Any]:
        """Commit the queued commands and return their per-command results."""
        return await self._executor.commit()

    async def aclose(self) -> None:
        """Close the underlying store handle."""
        await self._handle.aclose()
        logger.debug("facade_closed", mode=str(self.mode))

    def _status(self, result: Any) -> str:  # noqa: ANN401
        """Normalize redis-py's boolean acknowledgements to status strings."""
        if self.is_deferred:
            return STATUS_QUEUED
        if isinstance(result, str):
            return result
        return STATUS_OK if result else str(result)


def _check_key(key: object) -> None:
    """Reject keys that are not non-empty strings."""
    if not isinstance(key, str) or not key:
        msg = f"Key must be a non-empty string, got {key!r}"
        raise InvalidKeyError(msg)


def _check_value(value: object) -> None:
    """Reject values redis-py would refuse to encode."""
    if isinstance(value, bool) or not isinstance(value, _RAW_VALUE_TYPES):
        msg = f"Value must be str, bytes, int or float, got {type(value).__name__}"
        raise TypeError(msg)


def _coerce_pairs(pairs: Sequence[KeyValuePair | dict[str, Any]]) -> list[KeyValuePair]:
    """Validate every pair up front so no chunk is written for a bad input.

    Value failures raise ``TypeError`` like :meth:`KeyValueFacade.set_value`;
    anything else about the pair is an :class:`InvalidKeyError`.
    """
    try:
        return [KeyValuePair.coerce(item) for item in pairs]
    except ValidationError as exc:
        if any(error["loc"][:1] == ("value",) for error in exc.errors()):
            msg = f"Value must be str, bytes, int or float: {exc}"
            raise TypeError(msg) from exc
        raise InvalidKeyError(str(exc)) from exc
