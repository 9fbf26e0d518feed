"""Result types for frontend-agnostic error handling.

Repositories and the orchestration service return ``Result`` objects so a
failed sub-fetch reaches the interface layer as data, naming the fetch that
failed and whether a manual retry could help.
"""

from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorType(str, Enum):
    """Standard error types for consistent handling across frontends."""

    VALIDATION_ERROR = "validation_error"
    DATA_NOT_FOUND = "data_not_found"
    EXTERNAL_API_ERROR = "external_api_error"


class FetchFailure(str, Enum):
    """Why an upstream fetch failed."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    STATUS = "status"
    INVALID_PAYLOAD = "invalid_payload"


class SquadCompositionError(ValueError):
    """Raised when a squad cannot field any legal formation.

    A legal 15-player FPL squad always fits at least one formation, so this
    signals invalid upstream data rather than something a retry could fix.
    """


class DomainError(BaseModel):
    """Structured error information for frontend consumption."""

    error_type: ErrorType = Field(..., description="Standardized error type")
    message: str = Field(..., min_length=1, description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Additional error context (source, failure, ...)"
    )

    @classmethod
    def validation_error(
        cls, message: str, details: Optional[Dict] = None
    ) -> "DomainError":
        """Upstream data arrived but does not form valid domain objects."""
        return cls(
            error_type=ErrorType.VALIDATION_ERROR, message=message, details=details
        )

    @classmethod
    def data_not_found(
        cls, message: str, details: Optional[Dict] = None
    ) -> "DomainError":
        return cls(
            error_type=ErrorType.DATA_NOT_FOUND, message=message, details=details
        )

    @classmethod
    def external_api_error(
        cls,
        message: str,
        source: str,
        failure: FetchFailure,
        details: Optional[Dict] = None,
    ) -> "DomainError":
        """Create an external API error naming the failed sub-fetch."""
        return cls(
            error_type=ErrorType.EXTERNAL_API_ERROR,
            message=message,
            details={"source": source, "failure": failure.value, **(details or {})},
        )

    @property
    def source(self) -> Optional[str]:
        """Sub-fetch that failed (bootstrap, fixtures, entry, picks, history...)."""
        return (self.details or {}).get("source")

    @property
    def is_retryable(self) -> bool:
        """Timeouts and network errors may succeed on a manual retry."""
        failure = (self.details or {}).get("failure")
        return failure in (FetchFailure.TIMEOUT.value, FetchFailure.NETWORK.value)


class Result(Generic[T]):
    """
    Either a success value or a DomainError, never both.

    A successful result may carry an empty value (an empty chip history is
    still a success), so success is decided by the absence of an error.
    """

    def __init__(self, value: Optional[T] = None, error: Optional[DomainError] = None):
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        self._value = value
        self._error = error

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> "Result[T]":
        if error is None:
            raise ValueError("A failed result needs an error")
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        """The success value; accessing it on a failure raises ValueError."""
        if self._error is not None:
            raise ValueError(
                f"Cannot access value on failed result: {self._error.message}"
            )
        return self._value

    @property
    def error(self) -> DomainError:
        if self._error is None:
            raise ValueError("Cannot access error on successful result")
        return self._error

    def value_or(self, default: T) -> T:
        """The success value, or ``default`` for a failure."""
        return default if self._error is not None else self._value
