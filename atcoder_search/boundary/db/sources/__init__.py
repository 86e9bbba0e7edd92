"""
Row sources reading the crawled tables for document generation.
"""

from atcoder_search.boundary.db.sources.problem_source import ProblemRowSource
from atcoder_search.boundary.db.sources.recommend_source import RecommendRowSource
from atcoder_search.boundary.db.sources.user_source import UserRowSource

__all__ = ["ProblemRowSource", "RecommendRowSource", "UserRowSource"]
