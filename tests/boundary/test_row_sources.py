"""
Tests for the database row sources.

Runs against an in-memory SQLite database built from the ORM metadata.
"""

import pytest

from atcoder_search.boundary.db.models import (
    CategoryRelationshipModel,
    ContestModel,
    DifficultyModel,
    ProblemModel,
    SubmissionModel,
    UserModel,
)
from atcoder_search.boundary.db.sources import (
    ProblemRowSource,
    RecommendRowSource,
    UserRowSource,
)
from atcoder_search.core.indexing.rows import ProblemRow, RecommendRow, UserRow


def contest(contest_id: str, category: str) -> ContestModel:
    return ContestModel(
        contest_id=contest_id,
        start_epoch_second=1682769600,
        duration_second=6000,
        title=f"Contest {contest_id}",
        rate_change=" ~ 1999",
        category=category,
    )


def problem(problem_id: str, contest_id: str, difficulty: int | None = None) -> ProblemModel:
    return ProblemModel(
        problem_id=problem_id,
        contest_id=contest_id,
        problem_index=problem_id[-1].upper(),
        name=f"Problem {problem_id}",
        title=f"{problem_id[-1].upper()}. Problem {problem_id}",
        url=f"https://atcoder.jp/contests/{contest_id}/tasks/{problem_id}",
        html="<html></html>",
        difficulty=difficulty,
    )


def submission(id_: int, problem_id: str, result: str) -> SubmissionModel:
    return SubmissionModel(
        id=id_, epoch_second=1682769600 + id_, problem_id=problem_id, result=result
    )


@pytest.fixture
async def seeded(session_factory):
    async with session_factory() as session:
        session.add_all([contest("abc300", "ABC"), contest("arc150", "ARC")])
        await session.flush()
        session.add_all(
            [
                problem("abc300_a", "abc300", 20),
                problem("abc300_b", "abc300", 400),
                problem("arc150_a", "arc150", 1000),
                problem("arc150_b", "arc150"),
            ]
        )
        session.add_all(
            [
                DifficultyModel(problem_id="abc300_a", difficulty=850, is_experimental=False),
                DifficultyModel(problem_id="abc300_b", difficulty=800, is_experimental=False),
                DifficultyModel(problem_id="arc150_a", difficulty=900, is_experimental=True),
                DifficultyModel(problem_id="arc150_b", difficulty=None),
                CategoryRelationshipModel(from_category="ABC", to_category="ABC", weight=1.0),
                CategoryRelationshipModel(from_category="ABC", to_category="ARC", weight=0.5),
                submission(1, "abc300_a", "AC"),
                submission(2, "abc300_a", "AC"),
                submission(3, "abc300_a", "AC"),
                submission(4, "abc300_a", "AC"),
                submission(5, "abc300_b", "AC"),
                submission(6, "abc300_b", "WA"),
                submission(7, "arc150_a", "WA"),
                UserModel(
                    user_name="tourist",
                    rating=3800,
                    highest_rating=4229,
                    affiliation=None,
                    birth_year=1994,
                    country="BY",
                    crown=None,
                    join_count=60,
                    rank=1,
                    wins=20,
                ),
                UserModel(
                    user_name="chokudai",
                    rating=2000,
                    highest_rating=2500,
                    affiliation="AtCoder",
                    birth_year=None,
                    country="JP",
                    crown=None,
                    join_count=10,
                    rank=800,
                    wins=0,
                ),
            ]
        )
        await session.commit()
    return session_factory


async def collect(source) -> list:
    return [row async for row in source.read_rows()]


class TestProblemRowSource:
    @pytest.mark.asyncio
    async def test_reads_problems_with_contest(self, seeded):
        rows = {row.problem_id: row for row in await collect(ProblemRowSource(seeded))}

        assert set(rows) == {"abc300_a", "abc300_b", "arc150_a", "arc150_b"}
        row = rows["arc150_a"]
        assert isinstance(row, ProblemRow)
        assert row.contest_title == "Contest arc150"
        assert row.category == "ARC"
        assert row.start_at == 1682769600
        assert row.difficulty == 1000
        assert rows["arc150_b"].difficulty is None

    @pytest.mark.asyncio
    async def test_empty_store(self, session_factory):
        assert await collect(ProblemRowSource(session_factory)) == []


class TestUserRowSource:
    @pytest.mark.asyncio
    async def test_reads_users(self, seeded):
        rows = {row.user_name: row for row in await collect(UserRowSource(seeded))}

        assert set(rows) == {"tourist", "chokudai"}
        assert isinstance(rows["tourist"], UserRow)
        assert rows["chokudai"].affiliation == "AtCoder"
        assert rows["tourist"].to_document()["color"] == "gold"


class TestRecommendRowSource:
    """Test suite for RecommendRowSource."""

    @pytest.mark.asyncio
    async def test_rows_with_difficulty_only(self, seeded):
        rows = {row.problem_id: row for row in await collect(RecommendRowSource(seeded))}

        assert set(rows) == {"abc300_a", "abc300_b", "arc150_a"}
        assert all(isinstance(row, RecommendRow) for row in rows.values())
        assert rows["arc150_a"].is_experimental is True

    @pytest.mark.asyncio
    async def test_solved_count_is_normalised(self, seeded):
        rows = {row.problem_id: row for row in await collect(RecommendRowSource(seeded))}

        assert rows["abc300_a"].solved_count == pytest.approx(1.0)
        assert rows["abc300_b"].solved_count == pytest.approx(0.25)
        assert rows["arc150_a"].solved_count is None

    @pytest.mark.asyncio
    async def test_neighbours_ordered_by_distance(self, seeded):
        source = RecommendRowSource(seeded, max_connections=2)

        neighbours = await source.neighbours("abc300_a", 850, "ABC")

        assert [n.problem_id for n in neighbours] == ["abc300_b", "arc150_a"]
        assert [n.weight for n in neighbours] == [1.0, 0.5]
        assert neighbours[0].difficulty == 800

    @pytest.mark.asyncio
    async def test_neighbours_without_relationship(self, seeded):
        source = RecommendRowSource(seeded)

        neighbours = await source.neighbours("arc150_a", 900, "ARC")

        assert all(n.weight is None for n in neighbours)

    @pytest.mark.asyncio
    async def test_documents(self, seeded):
        rows = {row.problem_id: row for row in await collect(RecommendRowSource(seeded))}

        document = await rows["abc300_a"].to_document()

        assert document["category_correlation"] == "abc300_b|1 arc150_a|0.5"
        assert document["difficulty_correlation"].startswith("abc300_b|")
