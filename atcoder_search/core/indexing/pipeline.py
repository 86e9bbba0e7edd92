"""
Chunked document generation pipeline.

Streams rows from a row source, converts each row to a document in its own
task and batches the documents into numbered output units.

    row source ──▶ producer tasks ──▶ bounded queue (2 × chunk) ──▶ consumer ──▶ sink

A single consumer owns the batch and assigns unit sequence numbers, so
units are written in sequence order even though documents arrive in
completion order. The first failure anywhere aborts the run.

Dependencies: asyncio (stdlib)
System role: Indexing orchestration shared by every document domain
"""

import asyncio
import inspect
import logging
from contextlib import aclosing
from typing import Any, AsyncGenerator, Awaitable, Protocol, TypeVar

from atcoder_search.core.exceptions import GenerationError
from atcoder_search.core.indexing.expansion import Document
from atcoder_search.core.indexing.sink import OutputSink

logger = logging.getLogger(__name__)

_CLOSED = object()


class ToDocument(Protocol):
    """A row that converts itself into an engine document."""

    @property
    def row_id(self) -> str:
        """Identifier used in error reports."""
        ...

    def to_document(self) -> Document | Awaitable[Document]:
        """Build the document; may be a coroutine function."""
        ...


RowT = TypeVar("RowT", bound=ToDocument, covariant=True)


class RowSource(Protocol[RowT]):
    """Lazily yields rows; owns any store connection it needs."""

    def read_rows(self) -> AsyncGenerator[RowT, None]:
        ...


class _GenerationRun:
    """State shared by the tasks of one ``generate`` call."""

    def __init__(self, sink: OutputSink, chunk_size: int) -> None:
        self.sink = sink
        self.chunk_size = chunk_size
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=2 * chunk_size)
        # At most one chunk of producers is transforming or waiting on the queue
        self.slots = asyncio.Semaphore(chunk_size)
        self.producers: set[asyncio.Task] = set()
        self.consumer: asyncio.Task | None = None
        self.error: GenerationError | None = None
        self.flushing = False
        self.units = 0
        self.documents = 0

    def spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self.producers.add(task)
        task.add_done_callback(self.producers.discard)
        return task

    def spawn_producer(self, row: ToDocument) -> asyncio.Task:
        task = self.spawn(self.produce(row))
        # A task cancelled before its first step never runs its body
        task.add_done_callback(lambda _: self.slots.release())
        return task

    def fail(self, error: GenerationError) -> None:
        """Record the first error and stop every other task."""
        if self.error is not None:
            return
        self.error = error
        current = asyncio.current_task()
        for task in list(self.producers):
            if task is not current:
                task.cancel()
        # An in-progress unit write is allowed to finish; the consumer exits after it
        if self.consumer is not None and self.consumer is not current and not self.flushing:
            self.consumer.cancel()

    async def produce(self, row: ToDocument) -> None:
        try:
            document = row.to_document()
            if inspect.isawaitable(document):
                document = await document
            await self.queue.put(document)
        except Exception as e:
            self.fail(
                GenerationError(
                    f"failed to transform row: {e}", cause=e, row_id=_row_id(row)
                )
            )

    async def close(self) -> None:
        await self.queue.put(_CLOSED)

    async def consume(self) -> None:
        batch: list[Document] = []
        try:
            while True:
                item = await self.queue.get()
                if item is _CLOSED:
                    break
                batch.append(item)
                if len(batch) >= self.chunk_size:
                    await self.flush(batch)
                    batch = []
                    if self.error is not None:
                        return
            if batch:
                await self.flush(batch)
        except Exception as e:
            self.fail(
                GenerationError(
                    f"failed to write output unit: {e}", cause=e, sequence=self.units + 1
                )
            )

    async def flush(self, batch: list[Document]) -> None:
        sequence = self.units + 1
        self.flushing = True
        try:
            await asyncio.to_thread(self.sink.write_unit, sequence, batch)
        finally:
            self.flushing = False
        self.units = sequence
        self.documents += len(batch)


def _row_id(row: Any) -> str | None:
    row_id = getattr(row, "row_id", None)
    return None if row_id is None else str(row_id)


async def generate(row_source: RowSource, sink: OutputSink, chunk_size: int) -> int:
    """
    Generate documents for every row and write them in units of ``chunk_size``.

    Rows are transformed concurrently. At most ``4 * chunk_size`` documents
    are held at once: the queue holds ``2 * chunk_size``, producers waiting on
    it hold ``chunk_size`` and the consumer batch holds the rest. Units written before a failure stay on the sink; callers
    clean the destination before a fresh run.

    Args:
        row_source: Source of rows implementing ``to_document``
        sink: Unit destination
        chunk_size: Maximum documents per unit

    Returns:
        int: Number of units written

    Raises:
        ValueError: If chunk_size is not positive
        GenerationError: On the first row, read or write failure
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    run = _GenerationRun(sink, chunk_size)
    run.consumer = asyncio.create_task(run.consume())

    try:
        try:
            async with aclosing(row_source.read_rows()) as rows:
                async for row in rows:
                    await run.slots.acquire()
                    if run.error is not None:
                        run.slots.release()
                        break
                    run.spawn_producer(row)
        except Exception as e:
            run.fail(GenerationError(f"failed to read rows: {e}", cause=e))

        if run.producers:
            await asyncio.wait(set(run.producers))
        if run.error is None:
            run.spawn(run.close())
        await asyncio.wait({run.consumer})
    finally:
        for task in [*run.producers, run.consumer]:
            if not task.done():
                task.cancel()

    if run.error is not None:
        logger.error(
            f"{__name__}:generate - Generation aborted",
            extra={
                "row_id": run.error.row_id,
                "sequence": run.error.sequence,
                "units_written": run.units,
                "error_msg": str(run.error),
            },
        )
        raise run.error

    logger.info(
        f"{__name__}:generate - Generated {run.documents} documents in {run.units} units",
        extra={"chunk_size": chunk_size},
    )
    return run.units
