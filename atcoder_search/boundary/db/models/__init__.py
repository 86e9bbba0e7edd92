"""
ORM models of the crawled tables.
"""

from atcoder_search.boundary.db.models.problem_model import (
    CategoryRelationshipModel,
    ContestModel,
    DifficultyModel,
    ProblemModel,
)
from atcoder_search.boundary.db.models.submission_model import SubmissionModel
from atcoder_search.boundary.db.models.user_model import UserModel

__all__ = [
    "CategoryRelationshipModel",
    "ContestModel",
    "DifficultyModel",
    "ProblemModel",
    "SubmissionModel",
    "UserModel",
]
