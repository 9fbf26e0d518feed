"""Common domain types and utilities."""

from .result import DomainError, ErrorType, FetchFailure, Result, SquadCompositionError

__all__ = [
    "Result",
    "DomainError",
    "ErrorType",
    "FetchFailure",
    "SquadCompositionError",
]
