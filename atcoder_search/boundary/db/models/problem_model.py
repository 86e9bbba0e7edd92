"""
Contest and problem ORM models.

Tables filled by the crawler; read by the problem and recommendation
row sources.

Dependencies: sqlalchemy, atcoder_search.boundary.db.base
System role: Problem persistence
"""

from sqlalchemy import BigInteger, Boolean, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from atcoder_search.boundary.db.base import Base, TimestampMixin


class ContestModel(Base, TimestampMixin):
    """
    Contest held on AtCoder.

    Attributes:
        contest_id: Contest id such as ``abc300``
        start_epoch_second: Start time as UNIX seconds
        duration_second: Contest length in seconds
        title: Contest title
        rate_change: Rated range label
        category: Contest category such as ``ABC`` or ``ARC``
    """

    __tablename__ = "contests"

    contest_id: Mapped[str] = mapped_column(Text, primary_key=True)
    start_epoch_second: Mapped[int] = mapped_column(BigInteger, nullable=False)
    duration_second: Mapped[int] = mapped_column(BigInteger, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    rate_change: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)


class ProblemModel(Base, TimestampMixin):
    """
    Problem with the stored HTML of its task page.

    Attributes:
        problem_id: Problem id such as ``abc300_a``
        contest_id: Owning contest
        problem_index: Index inside the contest (``A``, ``B`` ...)
        name: Problem name without the index
        title: Display title
        url: Task page URL
        html: Raw task page
        difficulty: Estimated difficulty, None when not estimated
    """

    __tablename__ = "problems"

    problem_id: Mapped[str] = mapped_column(Text, primary_key=True)
    contest_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("contests.contest_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    problem_index: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    html: Mapped[str] = mapped_column(Text, nullable=False)
    difficulty: Mapped[int | None] = mapped_column(Integer, nullable=True)


class DifficultyModel(Base, TimestampMixin):
    """Difficulty estimate of a problem."""

    __tablename__ = "difficulties"

    problem_id: Mapped[str] = mapped_column(Text, primary_key=True)
    slope: Mapped[float | None] = mapped_column(Float, nullable=True)
    intercept: Mapped[float | None] = mapped_column(Float, nullable=True)
    variance: Mapped[float | None] = mapped_column(Float, nullable=True)
    difficulty: Mapped[int | None] = mapped_column(Integer, nullable=True)
    discrimination: Mapped[float | None] = mapped_column(Float, nullable=True)
    irt_loglikelihood: Mapped[float | None] = mapped_column(Float, nullable=True)
    irt_users: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_experimental: Mapped[bool | None] = mapped_column(Boolean, nullable=True)


class CategoryRelationshipModel(Base):
    """Similarity weight from one contest category to another."""

    __tablename__ = "category_relationships"

    from_category: Mapped[str] = mapped_column("from", Text, primary_key=True)
    to_category: Mapped[str] = mapped_column("to", Text, primary_key=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
