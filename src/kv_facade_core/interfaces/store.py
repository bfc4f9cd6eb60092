"""Abstract store interfaces consumed by the facade."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TransactionBuffer(Protocol):
    """Transactional pipeline: verbs queue locally until ``execute``."""

    def set(self, name: str, value: Any) -> Any: ...  # noqa: ANN401

    def get(self, name: str) -> Any: ...  # noqa: ANN401

    def mset(self, mapping: Mapping[str, Any]) -> Any: ...  # noqa: ANN401

    def mget(self, keys: Sequence[str]) -> Any: ...  # noqa: ANN401

    def keys(self, pattern: str) -> Any: ...  # noqa: ANN401

    def delete(self, *names: str) -> Any: ...  # noqa: ANN401

    def flushall(self) -> Any: ...  # noqa: ANN401

    async def execute(self) -> list[Any]:
        """Apply every queued command atomically and return their results."""
        ...


@runtime_checkable
class StoreHandle(Protocol):
    """Connection handle to the store; mirrors the ``redis.asyncio.Redis`` verbs used."""

    async def set(self, name: str, value: Any) -> Any: ...  # noqa: ANN401

    async def get(self, name: str) -> str | None: ...

    async def mset(self, mapping: Mapping[str, Any]) -> Any: ...  # noqa: ANN401

    async def mget(self, keys: Sequence[str]) -> list[str | None]: ...

    async def keys(self, pattern: str) -> list[str]: ...

    async def delete(self, *names: str) -> int: ...

    async def exists(self, *names: str) -> int: ...

    async def flushall(self) -> Any: ...  # noqa: ANN401

    def pipeline(self, transaction: bool = True) -> TransactionBuffer:
        """Create a transaction buffer bound to this connection."""
        ...

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        ...
