"""
Document generation configuration.

Output directory and batch sizes for the indexing pipeline.

Dependencies: pydantic, pydantic_settings
System role: Indexing pipeline configuration
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from atcoder_search.configs.base import BaseSettings


class GenerationSettings(BaseSettings):
    """Document generation configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DOCUMENT_",
        case_sensitive=False,
        extra="ignore",
    )

    save_directory: Path = Field(
        default=Path("./data/documents"),
        description="Root directory; each domain writes into its own subdirectory",
    )
    file_prefix: str = Field(default="doc", description="Prefix of generated unit files")

    problems_chunk_size: int = Field(default=1000, ge=1)
    users_chunk_size: int = Field(default=10000, ge=1)
    recommends_chunk_size: int = Field(default=1000, ge=1)

    def domain_directory(self, domain: str) -> Path:
        """Directory holding the units of one domain."""
        return self.save_directory / domain

    def chunk_size(self, domain: str) -> int:
        """
        Batch size for a domain.

        Raises:
            ValueError: If the domain is unknown
        """
        sizes = {
            "problems": self.problems_chunk_size,
            "users": self.users_chunk_size,
            "recommends": self.recommends_chunk_size,
        }
        if domain not in sizes:
            raise ValueError(f"unknown domain: {domain}")
        return sizes[domain]
