"""
User ranking ORM model.

Dependencies: sqlalchemy, atcoder_search.boundary.db.base
System role: User ranking persistence
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from atcoder_search.boundary.db.base import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """Row of the AtCoder ranking."""

    __tablename__ = "users"

    user_name: Mapped[str] = mapped_column(Text, primary_key=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    highest_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    affiliation: Mapped[str | None] = mapped_column(Text, nullable=True)
    birth_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    country: Mapped[str | None] = mapped_column(Text, nullable=True)
    crown: Mapped[str | None] = mapped_column(Text, nullable=True)
    join_count: Mapped[int] = mapped_column(Integer, nullable=False)
    rank: Mapped[int] = mapped_column(Integer, nullable=False)
    wins: Mapped[int] = mapped_column(Integer, nullable=False)
