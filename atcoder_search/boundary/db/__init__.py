"""
Database boundary layer: ORM models, row sources and connection management.

Exports:
  - Base, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(): Async connection management

Dependencies: sqlalchemy, atcoder_search.configs
System role: Relational store adapter feeding document generation
"""

from atcoder_search.boundary.db.base import Base, TimestampMixin
from atcoder_search.boundary.db.connection import get_async_engine, get_async_session_factory

__all__ = [
    "Base",
    "TimestampMixin",
    "get_async_engine",
    "get_async_session_factory",
]
