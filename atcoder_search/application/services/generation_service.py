"""
Document generation service.

Runs the generation pipeline for one indexing domain: clean the domain's
output directory, then stream its rows into numbered unit files.

Dependencies: atcoder_search.core.indexing, atcoder_search.boundary.db
System role: Use case behind the ``generate`` command
"""

import logging
import time
from pathlib import Path

from sqlalchemy.ext.asyncio import async_sessionmaker

from atcoder_search.boundary.db.sources import (
    ProblemRowSource,
    RecommendRowSource,
    UserRowSource,
)
from atcoder_search.configs import Settings
from atcoder_search.core.exceptions import GenerationError
from atcoder_search.core.indexing import FileSink, RowSource, generate
from atcoder_search.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

DOMAINS = ("problems", "users", "recommends")


class DocumentGenerator:
    """
    Generates the documents of one domain into a directory.

    Attributes:
        domain: Domain name used in logs
        source: Row source
        sink: Unit file sink
        chunk_size: Documents per unit
    """

    def __init__(self, domain: str, source: RowSource, sink: FileSink, chunk_size: int) -> None:
        self.domain = domain
        self.source = source
        self.sink = sink
        self.chunk_size = chunk_size

    async def run(self) -> int:
        """
        Clean the output directory and generate every document.

        Returns:
            int: Number of units written

        Raises:
            GenerationError: If cleaning fails or any row, read or write fails
        """
        try:
            self.sink.clean()
        except OSError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:run - Failed to delete existing documents",
                e,
                domain=self.domain,
                save_dir=str(self.sink.save_dir),
            )
            raise GenerationError(f"failed to delete existing documents: {e}", cause=e) from e

        start = time.perf_counter()
        try:
            units = await generate(self.source, self.sink, self.chunk_size)
        except GenerationError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:run - Failed to generate documents",
                e,
                domain=self.domain,
                row_id=e.row_id,
                sequence=e.sequence,
            )
            raise

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:run - Generated {self.domain} documents",
            domain=self.domain,
            units=units,
            elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return units


def create_generator(
    domain: str,
    session_factory: async_sessionmaker,
    settings: Settings,
    save_dir: Path | None = None,
) -> DocumentGenerator:
    """
    Build the generator of a domain from settings.

    Args:
        domain: One of ``problems``, ``users``, ``recommends``
        session_factory: Async session factory of the relational store
        settings: Application settings
        save_dir: Output directory overriding the configured one

    Raises:
        ValueError: If the domain is unknown
    """
    sources = {
        "problems": lambda: ProblemRowSource(session_factory),
        "users": lambda: UserRowSource(session_factory),
        "recommends": lambda: RecommendRowSource(
            session_factory, max_connections=settings.database.pool_size
        ),
    }
    if domain not in sources:
        raise ValueError(f"unknown domain: {domain}")

    generation = settings.generation
    sink = FileSink(
        save_dir or generation.domain_directory(domain),
        prefix=generation.file_prefix,
    )
    return DocumentGenerator(
        domain=domain,
        source=sources[domain](),
        sink=sink,
        chunk_size=generation.chunk_size(domain),
    )
