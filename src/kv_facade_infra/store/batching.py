"""Sequential chunked execution for bulk writes and deletes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Sequence
from typing import Any, TypeVar

import structlog

from kv_facade_core.constants import STATUS_OK

logger = structlog.get_logger()

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield contiguous slices of at most ``size`` items, in order."""
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        msg = f"chunk size must be a positive integer, got {size!r}"
        raise ValueError(msg)
    for start in range(0, len(items), size):
        yield items[start : start + size]


async def batch_execute(
    items: Sequence[T],
    size: int,
    action: Callable[[Sequence[T]], Awaitable[Any]],
) -> str:
    """Await ``action`` once per chunk, one chunk at a time.

    The first failing chunk stops the loop and its error propagates.
    Chunks that already ran stay applied; there is no rollback.
    Returns ``"OK"`` when every chunk succeeded, including when there
    were no items at all.
    """
    for index, chunk in enumerate(chunked(items, size)):
        try:
            await action(chunk)
        except Exception as exc:
            logger.error(
                "batch_failed",
                batch=index,
                batch_size=len(chunk),
                applied_batches=index,
                error=str(exc),
            )
            raise
    return STATUS_OK
