"""
HTTP API configuration.

Dependencies: pydantic, pydantic_settings
System role: Web server configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from atcoder_search.configs.base import BaseSettings


class ApiSettings(BaseSettings):
    """Search API server configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="API_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
