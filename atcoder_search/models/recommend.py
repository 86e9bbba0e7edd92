"""
Recommendation document model.

Dependencies: pydantic
System role: Recommendation indexing contract
"""

from pydantic import BaseModel


class RecommendDocument(BaseModel):
    """
    Problem neighbourhood indexed in the recommends core.

    Correlation fields hold space-separated ``<problem_id>|<weight>`` pairs
    and are None for problems without a difficulty.
    """

    problem_id: str
    difficulty_correlation: str | None = None
    category_correlation: str | None = None
    difficulty: int | None = None
    is_experimental: bool = False
    solved_count: float = 0.0
