"""
Document indexing core.

Text extraction, field expansion and the chunked generation pipeline.
"""

from atcoder_search.core.indexing.expansion import expand, suffix
from atcoder_search.core.indexing.extractor import EXTRACTOR, FullTextExtractor
from atcoder_search.core.indexing.pipeline import RowSource, generate
from atcoder_search.core.indexing.sink import FileSink

__all__ = [
    "EXTRACTOR",
    "FileSink",
    "FullTextExtractor",
    "RowSource",
    "expand",
    "generate",
    "suffix",
]
