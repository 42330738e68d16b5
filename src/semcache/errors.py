"""
semcache error classification.

This module defines the exceptions raised by the cache engine, its stores
and the embedding providers.

Error Categories:
-----------------
1. Caller errors: bad input, raised before any I/O
   - InvalidArgumentError (blank query, missing producer, vector length mismatch)

2. Construction errors: raised while building a cache, store or embedder
   - ConfigurationError (unknown store/embedder type, threshold out of range)

3. Collaborator errors: surfaced unchanged, never retried
   - EmbeddingError / EmbeddingTimeoutError (embedding provider)
   - StoreError (shared backend unreachable, undecodable payload)

Usage:
------
    from semcache.errors import InvalidArgumentError, EmbeddingTimeoutError

    try:
        answer = cache.fetch(question, producer=lambda: llm.chat(question))
    except EmbeddingTimeoutError as e:
        logger.warning(f"Embedding timed out after {e.timeout}s")
"""

from typing import Any


class SemCacheError(Exception):
    """
    Base exception for all semcache errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
        original_error: The underlying exception that caused this error (optional)
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.original_error:
            base += f" | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None
        }


class InvalidArgumentError(SemCacheError, ValueError):
    """
    Raised when a caller passes unusable input.

    Common causes:
    - Missing or blank query text
    - Missing producer callable
    - Vectors of different lengths
    - Empty or malformed batch input
    """

    def __init__(
        self,
        message: str = "Invalid argument",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class ConfigurationError(SemCacheError):
    """
    Raised when a cache, store or embedder cannot be built from its settings.

    Common causes:
    - Unknown store or embedder type
    - Similarity threshold outside [0, 1]
    - Missing connection settings for a shared backend
    """

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class EmbeddingError(SemCacheError):
    """Raised when the embedding provider fails or returns an unusable result."""
    pass


class EmbeddingTimeoutError(EmbeddingError):
    """
    Raised when an embedding request exceeds its configured timeout.

    Attributes:
        timeout: The timeout value that was exceeded (seconds)
    """

    def __init__(
        self,
        message: str = "Embedding request timed out",
        timeout: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        details = details or {}
        details["timeout"] = timeout
        super().__init__(message, details, original_error)
        self.timeout = timeout


class StoreError(SemCacheError):
    """Raised when a cache store backend cannot be read or written."""
    pass
