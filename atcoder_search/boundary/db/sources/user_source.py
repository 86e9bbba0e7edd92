"""
User row source.

Dependencies: sqlalchemy, atcoder_search.boundary.db.models
System role: Row source of the user indexing pipeline
"""

import logging
from typing import AsyncIterator

from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker

from atcoder_search.boundary.db.models import UserModel
from atcoder_search.core.indexing.rows import UserRow

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    "user_name",
    "rating",
    "highest_rating",
    "affiliation",
    "birth_year",
    "country",
    "crown",
    "join_count",
    "rank",
    "wins",
)


class UserRowSource:
    """Reads every ranking record as a ``UserRow``."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def read_rows(self) -> AsyncIterator[UserRow]:
        stmt = select(*(getattr(UserModel, column) for column in USER_COLUMNS))
        count = 0
        async with self._session_factory() as session:
            result = await session.stream(stmt)
            async for row in result.mappings():
                count += 1
                yield UserRow(**row)
        logger.info(f"{__name__}:read_rows - Read {count} users")
