"""
Domain exceptions for the smart search application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class SmartSearchError(Exception):
    """Base exception for all smart search errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(SmartSearchError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class InvalidQueryError(ValidationError):
    """Search query is missing or blank."""

    def __init__(self, query: str | None = None):
        super().__init__(field="query", message="Query must not be blank", value=query)
        self.code = "INVALID_QUERY"


# Search Exceptions
class SearchError(SmartSearchError):
    """Base exception for search operations."""

    pass


class UnsafeIdentifierError(SearchError):
    """Collection or field name is not a plain identifier."""

    def __init__(self, kind: str, name: str):
        super().__init__(
            f"Unsafe {kind} name: {name!r}",
            code="UNSAFE_IDENTIFIER",
            details={"kind": kind, "name": name[:100]},
        )


# Storage Exceptions
class StorageError(SmartSearchError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Topic Model Exceptions
class TopicModelError(SmartSearchError):
    """Base exception for topic model operations."""

    pass


class TopicModelTrainingError(TopicModelError):
    """Topic model training failed."""

    def __init__(self, reason: str, num_documents: int = 0):
        super().__init__(
            f"Topic model training failed: {reason}",
            code="TOPIC_TRAINING_FAILED",
            details={"reason": reason, "num_documents": num_documents},
        )


# Admission Exceptions
class AdmissionError(SmartSearchError):
    """Base exception for request admission."""

    pass


class AdmissionStoreError(AdmissionError):
    """Shared admission store is unreachable or returned garbage."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Admission store error during {operation}: {error}",
            code="ADMISSION_STORE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(SmartSearchError):
    """Configuration error."""

    pass
