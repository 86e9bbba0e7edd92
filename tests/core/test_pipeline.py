"""
Tests for the chunked document generation pipeline.

Uses in-memory row sources and sinks; no database or filesystem.
"""

import asyncio
import math
from dataclasses import dataclass

import pytest

from atcoder_search.core.exceptions import GenerationError, TransformationError
from atcoder_search.core.indexing.pipeline import generate
from tests.conftest import MemorySink


@dataclass
class FakeRow:
    index: int
    fail: bool = False

    @property
    def row_id(self) -> str:
        return f"row-{self.index}"

    def to_document(self):
        if self.fail:
            raise TransformationError("broken row", row_id=self.row_id)
        return {"id": self.row_id, "index": self.index}


@dataclass
class AsyncFakeRow(FakeRow):
    async def to_document(self):
        # Finish in reverse order of arrival
        await asyncio.sleep(0.001 * (10 - self.index % 10))
        return FakeRow.to_document(self)


class ListSource:
    def __init__(self, rows, fail_after: int | None = None):
        self.rows = rows
        self.fail_after = fail_after

    async def read_rows(self):
        for i, row in enumerate(self.rows):
            if self.fail_after is not None and i == self.fail_after:
                raise ConnectionError("connection reset")
            yield row


class TestGenerate:
    """Test suite for generate."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("n, chunk", [(1, 1), (10, 3), (9, 3), (25, 10)])
    async def test_unit_count(self, n, chunk):
        sink = MemorySink()

        units = await generate(ListSource([FakeRow(i) for i in range(n)]), sink, chunk)

        assert units == math.ceil(n / chunk)
        assert sorted(sink.units) == list(range(1, units + 1))

    @pytest.mark.asyncio
    async def test_unit_sizes(self):
        sink = MemorySink()

        await generate(ListSource([FakeRow(i) for i in range(10)]), sink, 3)

        assert [len(sink.units[seq]) for seq in sorted(sink.units)] == [3, 3, 3, 1]

    @pytest.mark.asyncio
    async def test_every_row_written_once(self):
        sink = MemorySink()

        await generate(ListSource([AsyncFakeRow(i) for i in range(37)]), sink, 5)

        ids = sorted(doc["index"] for doc in sink.documents)
        assert ids == list(range(37))

    @pytest.mark.asyncio
    async def test_units_written_in_sequence_order(self):
        sink = MemorySink()

        await generate(ListSource([AsyncFakeRow(i) for i in range(30)]), sink, 4)

        assert sink.order == sorted(sink.order)

    @pytest.mark.asyncio
    async def test_empty_source_writes_nothing(self):
        sink = MemorySink()

        units = await generate(ListSource([]), sink, 10)

        assert units == 0
        assert sink.units == {}

    @pytest.mark.asyncio
    async def test_row_failure_aborts(self):
        sink = MemorySink()
        rows = [FakeRow(i, fail=(i == 7)) for i in range(20)]

        with pytest.raises(GenerationError) as exc_info:
            await generate(ListSource(rows), sink, 3)

        assert exc_info.value.row_id == "row-7"
        assert isinstance(exc_info.value.cause, TransformationError)
        assert len(sink.units) <= math.ceil(7 / 3)
        assert all(doc["index"] < 7 for doc in sink.documents)

    @pytest.mark.asyncio
    async def test_read_failure_aborts(self):
        sink = MemorySink()

        with pytest.raises(GenerationError) as exc_info:
            await generate(ListSource([FakeRow(i) for i in range(10)], fail_after=4), sink, 2)

        assert isinstance(exc_info.value.cause, ConnectionError)

    @pytest.mark.asyncio
    async def test_sink_failure_aborts(self):
        sink = MemorySink(fail_on=2)

        with pytest.raises(GenerationError) as exc_info:
            await generate(ListSource([FakeRow(i) for i in range(10)]), sink, 3)

        assert exc_info.value.sequence == 2
        assert isinstance(exc_info.value.cause, OSError)
        assert 2 not in sink.units
        assert 3 not in sink.units

    @pytest.mark.asyncio
    async def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            await generate(ListSource([]), MemorySink(), 0)

    @pytest.mark.asyncio
    async def test_buffer_is_bounded(self):
        in_flight = 0
        peak = 0

        class SlowRow(FakeRow):
            async def to_document(self):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.001)
                in_flight -= 1
                return {"index": self.index}

        await generate(ListSource([SlowRow(i) for i in range(50)]), MemorySink(), 4)

        assert peak <= 4
