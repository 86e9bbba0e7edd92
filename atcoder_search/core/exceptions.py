"""
Exception hierarchy for the AtCoder search backend.

Provides layered exception structure for indexing and search errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AtCoderSearchException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MalformedInputError(AtCoderSearchException):
    """Raised when an HTML document cannot be parsed at all."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class TransformationError(AtCoderSearchException):
    """Raised when a row cannot be turned into a document."""

    def __init__(
        self,
        message: str,
        row_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if row_id is not None:
            details["row_id"] = row_id
        self.row_id = row_id
        super().__init__(message, details)


class SinkWriteError(AtCoderSearchException):
    """Raised when an output unit cannot be written."""

    def __init__(
        self,
        message: str,
        sequence: int,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["sequence"] = sequence
        if path:
            details["path"] = path
        self.sequence = sequence
        self.path = path
        super().__init__(message, details)


class GenerationError(AtCoderSearchException):
    """
    Raised when a document generation run aborts.

    Wraps the first fatal error observed by any producer or the consumer.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        row_id: str | None = None,
        sequence: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
        if row_id is not None:
            details["row_id"] = row_id
        if sequence is not None:
            details["sequence"] = sequence
        self.cause = cause
        self.row_id = row_id
        self.sequence = sequence
        super().__init__(message, details)


class RequestValidationError(AtCoderSearchException):
    """Raised when a search request is malformed or uses a disallowed value."""

    def __init__(
        self,
        message: str,
        errors: list[Any] | None = None,
        params: Any = None,
    ) -> None:
        self.errors = errors or []
        self.params = params
        super().__init__(message, {"errors": self.errors} if self.errors else None)


class SearchEngineError(AtCoderSearchException):
    """Raised when the search engine rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        if status_code is not None:
            details["status_code"] = status_code
        self.operation = operation
        self.status_code = status_code
        super().__init__(message, details)


class CoreNotFoundError(SearchEngineError):
    """Raised when the engine reports no core with the requested name."""

    def __init__(self, core_name: str) -> None:
        self.core_name = core_name
        super().__init__(
            f"core '{core_name}' does not exist",
            operation="status",
            details={"core": core_name},
        )


class UploadError(AtCoderSearchException):
    """Raised when posting generated documents fails; the core is rolled back."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if path:
            details["path"] = path
        self.path = path
        super().__init__(message, details)
