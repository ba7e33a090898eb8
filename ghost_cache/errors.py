"""
Ghost Cache - Core Error Types

Defines the exception hierarchy for the caching and interception layer.
All exceptions inherit from GhostCacheError for consistent error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Standard error codes attached to GhostCacheError.to_dict().

    Used for structured logging and caller-side error handling.
    """

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERCEPTION_ERROR = "INTERCEPTION_ERROR"
    CACHE_FAILURE = "CACHE_FAILURE"
    STORAGE_FAILURE = "STORAGE_FAILURE"
    SERIALIZATION_FAILURE = "SERIALIZATION_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GhostCacheError(Exception):
    """Base exception for all Ghost Cache errors."""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logs and error reports."""
        return {
            "error": self.__class__.__name__,
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(GhostCacheError):
    """Raised when options are invalid or a required collaborator is missing."""

    error_code = ErrorCode.CONFIGURATION_ERROR


class InterceptionError(GhostCacheError):
    """
    Raised when the interception layer is used outside its lifecycle.

    Covers the fatal precondition of a wrapper being invoked without a
    captured original primitive, and double installs over a wrapper that
    belongs to another context.
    """

    error_code = ErrorCode.INTERCEPTION_ERROR


class CacheError(GhostCacheError):
    """Base exception for cache-related errors."""

    error_code = ErrorCode.CACHE_FAILURE


class StorageError(CacheError):
    """Raised when a persistent storage backend operation fails."""

    error_code = ErrorCode.STORAGE_FAILURE

    def __init__(
        self,
        backend: str,
        operation: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        message = f"Storage backend '{backend}' failed during {operation}"
        if key is not None:
            message += f" for key {key!r}"
        error_details = details or {}
        error_details.update({"backend": backend, "operation": operation, "key": key})
        super().__init__(message, error_details)

        self.backend = backend
        self.operation = operation
        self.key = key


class SerializationError(CacheError):
    """Raised when a manually cached value cannot be encoded as JSON."""

    error_code = ErrorCode.SERIALIZATION_FAILURE


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract the appropriate ErrorCode from an exception.

    Args:
        error: Exception to categorize

    Returns:
        ErrorCode of a GhostCacheError, INTERNAL_ERROR for anything else
    """
    if isinstance(error, GhostCacheError):
        return error.error_code
    return ErrorCode.INTERNAL_ERROR
