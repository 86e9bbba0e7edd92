"""
Tests for shared settings.

Dependencies: pytest, pydantic
System role: Configuration validation tests
"""

import pytest
from pydantic import ValidationError

from atcoder_search.configs.base import BaseSettings


class TestBaseSettings:
    """Test suite for BaseSettings."""

    def test_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert BaseSettings(_env_file=None).log_level == "DEBUG"

    def test_default_log_level(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        assert BaseSettings(_env_file=None).log_level == "INFO"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            BaseSettings(_env_file=None, log_level="LOUD")
