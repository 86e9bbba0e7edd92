"""
Dependency injection container.

Factory functions for FastAPI dependencies. Solr core clients are created
lazily, shared by every request and closed on shutdown.

Dependencies: atcoder_search.configs, atcoder_search.boundary.solr
System role: DI container for service injection
"""

from atcoder_search.application.services import SearchService
from atcoder_search.boundary.solr import StandaloneSolrCore
from atcoder_search.configs import get_settings


class CoreCache:
    """Container for cached Solr core clients."""

    def __init__(self) -> None:
        self._cores: dict[str, StandaloneSolrCore] = {}

    def core(self, domain: str) -> StandaloneSolrCore:
        """Get the cached client of a domain's core."""
        if domain not in self._cores:
            engine = get_settings().search_engine
            self._cores[domain] = StandaloneSolrCore(
                engine.core_name(domain),
                engine.host,
                timeout=engine.timeout,
                max_retries=engine.max_retries,
            )
        return self._cores[domain]

    async def close(self) -> None:
        """Close and forget all clients."""
        cores, self._cores = self._cores, {}
        for core in cores.values():
            await core.aclose()


# Global core cache
_core_cache = CoreCache()


def get_core_cache() -> CoreCache:
    """Get core cache singleton."""
    return _core_cache


def get_problem_search_service() -> SearchService:
    """Search service bound to the problems core."""
    return SearchService(get_core_cache().core("problems"))


def get_user_search_service() -> SearchService:
    """Search service bound to the users core."""
    return SearchService(get_core_cache().core("users"))


def get_search_cores() -> list[StandaloneSolrCore]:
    """Cores that must be healthy for the API to serve searches."""
    cache = get_core_cache()
    return [cache.core("problems"), cache.core("users")]
