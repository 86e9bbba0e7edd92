"""
Observability module.

Logging configuration, structured logging helpers and request middleware.
"""

from atcoder_search.observability.logger import configure_logging, QUERYLOG

__all__ = ["configure_logging", "QUERYLOG"]
