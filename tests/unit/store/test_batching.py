"""Tests for chunking and sequential batch execution."""

from __future__ import annotations

import math
from collections.abc import Sequence

import pytest

from kv_facade_infra.store.batching import batch_execute, chunked


@pytest.mark.unit
class TestChunked:
    """Test order-preserving slicing."""

    @pytest.mark.parametrize(
        ("n", "size"),
        [(1, 1), (5, 2), (10, 5), (11, 5), (3, 100)],
    )
    def test_chunk_count_and_order(self, n: int, size: int) -> None:
        """ceil(n/size) contiguous slices that rebuild the input."""
        items = list(range(n))
        chunks = list(chunked(items, size))
        assert len(chunks) == math.ceil(n / size)
        assert all(len(chunk) <= size for chunk in chunks)
        assert [item for chunk in chunks for item in chunk] == items

    def test_empty_input_yields_nothing(self) -> None:
        """No items, no chunks."""
        assert list(chunked([], 10)) == []

    @pytest.mark.parametrize("size", [0, -1, 2.5, True])
    def test_invalid_size_raises(self, size: object) -> None:
        """Chunk size must be a positive int."""
        with pytest.raises(ValueError, match="positive integer"):
            list(chunked([1, 2, 3], size))  # type: ignore[arg-type]


@pytest.mark.unit
class TestBatchExecute:
    """Test sequential execution with early exit."""

    async def test_all_batches_succeed(self) -> None:
        """Every chunk is passed to the action in order; result is OK."""
        seen: list[list[int]] = []

        async def action(chunk: Sequence[int]) -> None:
            seen.append(list(chunk))

        result = await batch_execute([1, 2, 3, 4, 5], 2, action)
        assert result == "OK"
        assert seen == [[1, 2], [3, 4], [5]]

    async def test_empty_input_is_ok(self) -> None:
        """Zero batches still resolves to OK."""

        async def action(chunk: Sequence[int]) -> None:
            raise AssertionError("should not be called")

        assert await batch_execute([], 3, action) == "OK"

    async def test_first_failure_stops_remaining(self) -> None:
        """A failing batch propagates its error; later batches never run."""
        seen: list[list[int]] = []

        async def action(chunk: Sequence[int]) -> None:
            seen.append(list(chunk))
            if 3 in chunk:
                raise RuntimeError("batch down")

        with pytest.raises(RuntimeError, match="batch down"):
            await batch_execute([1, 2, 3, 4, 5, 6], 2, action)
        assert seen == [[1, 2], [3, 4]]

    async def test_batches_run_sequentially(self) -> None:
        """A batch starts only after the previous one finished."""
        in_flight = 0
        peak = 0

        async def action(chunk: Sequence[int]) -> None:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            in_flight -= 1

        await batch_execute(list(range(20)), 3, action)
        assert peak == 1
