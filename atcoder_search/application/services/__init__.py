"""
Application services.
"""

from atcoder_search.application.services.generation_service import (
    DOMAINS,
    DocumentGenerator,
    create_generator,
)
from atcoder_search.application.services.search_service import SearchService
from atcoder_search.application.services.upload_service import DocumentUploader

__all__ = [
    "DOMAINS",
    "DocumentGenerator",
    "DocumentUploader",
    "SearchService",
    "create_generator",
]
