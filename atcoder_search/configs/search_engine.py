"""
Search engine configuration settings.

Solr host, core names and HTTP client behaviour.

Dependencies: pydantic, pydantic_settings
System role: Search engine connection configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from atcoder_search.configs.base import BaseSettings


class SearchEngineSettings(BaseSettings):
    """Solr connection configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SOLR_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="http://localhost:8983", description="Solr base URL")
    problems_core: str = Field(default="problems", description="Core holding problem documents")
    users_core: str = Field(default="users", description="Core holding user documents")
    recommends_core: str = Field(
        default="recommends", description="Core holding recommendation documents"
    )

    timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    max_retries: int = Field(default=3, description="Attempts for idempotent requests")

    def core_name(self, domain: str) -> str:
        """
        Resolve the core name for an indexing domain.

        Args:
            domain: One of ``problems``, ``users`` or ``recommends``

        Returns:
            str: Configured core name

        Raises:
            ValueError: If the domain is unknown
        """
        names = {
            "problems": self.problems_core,
            "users": self.users_core,
            "recommends": self.recommends_core,
        }
        if domain not in names:
            raise ValueError(f"unknown domain: {domain}")
        return names[domain]
