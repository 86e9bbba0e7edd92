"""
Submission ORM model.

Dependencies: sqlalchemy, atcoder_search.boundary.db.base
System role: Submission history used for solved counts
"""

from sqlalchemy import BigInteger, Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from atcoder_search.boundary.db.base import Base


class SubmissionModel(Base):
    """One judged submission."""

    __tablename__ = "submissions"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    epoch_second: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    problem_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    contest_id: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    user_id: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    language: Mapped[str | None] = mapped_column(Text, nullable=True)
    point: Mapped[float | None] = mapped_column(Float, nullable=True)
    length: Mapped[int | None] = mapped_column(Integer, nullable=True)
    result: Mapped[str | None] = mapped_column(Text, nullable=True)
    execution_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
