"""
Solr boundary: HTTP core client and response models.
"""

from atcoder_search.boundary.solr.core import StandaloneSolrCore
from atcoder_search.boundary.solr.models import (
    SolrCoreStatus,
    SolrPingResponse,
    SolrRangeFacetCount,
    SolrSelectResponse,
    SolrSimpleResponse,
    SolrTermFacetCount,
)

__all__ = [
    "SolrCoreStatus",
    "SolrPingResponse",
    "SolrRangeFacetCount",
    "SolrSelectResponse",
    "SolrSimpleResponse",
    "SolrTermFacetCount",
    "StandaloneSolrCore",
]
