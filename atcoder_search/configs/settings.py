"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI and the CLI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from atcoder_search.configs.api import ApiSettings
from atcoder_search.configs.base import BaseSettings
from atcoder_search.configs.database import DatabaseSettings
from atcoder_search.configs.generation import GenerationSettings
from atcoder_search.configs.search_engine import SearchEngineSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    search_engine: SearchEngineSettings = SearchEngineSettings()
    generation: GenerationSettings = GenerationSettings()
    api: ApiSettings = ApiSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once and cached.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
