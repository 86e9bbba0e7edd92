"""
Recommendation row source.

Streams problems that have a difficulty together with their normalised
solved count, and provides the neighbour lookup each row runs while it
is converted.

    solved_count = AC submissions of the problem / max AC submissions of any problem

Dependencies: sqlalchemy, atcoder_search.boundary.db.models
System role: Row source of the recommendation indexing pipeline
"""

import asyncio
import logging
from typing import AsyncIterator

from sqlalchemy import Float, and_, cast, func, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from atcoder_search.boundary.db.models import (
    CategoryRelationshipModel,
    ContestModel,
    DifficultyModel,
    ProblemModel,
    SubmissionModel,
)
from atcoder_search.core.indexing.rows import Neighbour, RecommendRow

logger = logging.getLogger(__name__)

NEIGHBOUR_LIMIT = 100


class RecommendRowSource:
    """
    Reads ``RecommendRow`` values.

    Lookups run on their own sessions while the row stream is still open;
    ``max_connections`` bounds how many run at once.
    """

    def __init__(self, session_factory: async_sessionmaker, max_connections: int = 10) -> None:
        self._session_factory = session_factory
        self._max_connections = max_connections
        self._lookup_slots: asyncio.Semaphore | None = None

    def statement(self):
        solved = (
            select(
                SubmissionModel.problem_id.label("problem_id"),
                func.count().label("solved_count"),
            )
            .where(SubmissionModel.result == "AC")
            .group_by(SubmissionModel.problem_id)
            .cte("solved_counts")
        )
        denominator = (
            select(func.max(solved.c.solved_count))
            .where(solved.c.solved_count > 0)
            .scalar_subquery()
        )
        return (
            select(
                ProblemModel.problem_id.label("problem_id"),
                ContestModel.category.label("category"),
                DifficultyModel.difficulty.label("difficulty"),
                DifficultyModel.is_experimental.label("is_experimental"),
                (cast(solved.c.solved_count, Float) / denominator).label("solved_count"),
            )
            .select_from(ProblemModel)
            .join(
                DifficultyModel,
                ProblemModel.problem_id == DifficultyModel.problem_id,
                isouter=True,
            )
            .join(
                ContestModel,
                ProblemModel.contest_id == ContestModel.contest_id,
                isouter=True,
            )
            .join(solved, ProblemModel.problem_id == solved.c.problem_id, isouter=True)
            .where(DifficultyModel.difficulty.is_not(None))
        )

    def neighbour_statement(self, problem_id: str, difficulty: int, category: str | None):
        """Nearest-difficulty problems with the category weight towards each."""
        return (
            select(
                ProblemModel.problem_id,
                DifficultyModel.difficulty,
                CategoryRelationshipModel.weight,
            )
            .join(DifficultyModel, ProblemModel.problem_id == DifficultyModel.problem_id)
            .join(
                ContestModel,
                ProblemModel.contest_id == ContestModel.contest_id,
                isouter=True,
            )
            .join(
                CategoryRelationshipModel,
                and_(
                    CategoryRelationshipModel.from_category == category,
                    CategoryRelationshipModel.to_category == ContestModel.category,
                ),
                isouter=True,
            )
            .where(
                ProblemModel.problem_id != problem_id,
                DifficultyModel.difficulty.is_not(None),
            )
            .order_by(
                func.abs(DifficultyModel.difficulty - difficulty),
                ProblemModel.problem_id,
            )
            .limit(NEIGHBOUR_LIMIT)
        )

    async def neighbours(
        self, problem_id: str, difficulty: int, category: str | None
    ) -> list[Neighbour]:
        if self._lookup_slots is None:
            self._lookup_slots = asyncio.Semaphore(self._max_connections)
        async with self._lookup_slots:
            async with self._session_factory() as session:
                result = await session.execute(
                    self.neighbour_statement(problem_id, difficulty, category)
                )
                return [Neighbour(*row) for row in result.all()]

    async def read_rows(self) -> AsyncIterator[RecommendRow]:
        count = 0
        async with self._session_factory() as session:
            result = await session.stream(self.statement())
            async for row in result.mappings():
                count += 1
                yield RecommendRow(lookup=self.neighbours, **row)
        logger.info(f"{__name__}:read_rows - Read {count} problems with difficulty")
