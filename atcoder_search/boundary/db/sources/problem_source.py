"""
Problem row source.

Streams every problem joined with its contest.

Dependencies: sqlalchemy, atcoder_search.boundary.db.models
System role: Row source of the problem indexing pipeline
"""

import logging
from typing import AsyncIterator

from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker

from atcoder_search.boundary.db.models import ContestModel, ProblemModel
from atcoder_search.core.indexing.rows import ProblemRow

logger = logging.getLogger(__name__)


class ProblemRowSource:
    """Reads ``ProblemRow`` values through a server-side cursor."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    def statement(self):
        return select(
            ProblemModel.problem_id.label("problem_id"),
            ProblemModel.title.label("problem_title"),
            ProblemModel.url.label("problem_url"),
            ContestModel.contest_id.label("contest_id"),
            ContestModel.title.label("contest_title"),
            ProblemModel.difficulty.label("difficulty"),
            ContestModel.start_epoch_second.label("start_at"),
            ContestModel.duration_second.label("duration"),
            ContestModel.rate_change.label("rate_change"),
            ContestModel.category.label("category"),
            ProblemModel.html.label("html"),
        ).join(ContestModel, ProblemModel.contest_id == ContestModel.contest_id)

    async def read_rows(self) -> AsyncIterator[ProblemRow]:
        count = 0
        async with self._session_factory() as session:
            result = await session.stream(self.statement())
            async for row in result.mappings():
                count += 1
                yield ProblemRow(**row)
        logger.info(f"{__name__}:read_rows - Read {count} problems")
