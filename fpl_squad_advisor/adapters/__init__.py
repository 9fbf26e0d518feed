"""Infrastructure adapters for repository pattern implementations."""

from .fpl_api_repositories import (
    FPLApiClient,
    FPLApiError,
    FPLApiRepository,
    free_transfers_from_history,
)

__all__ = [
    "FPLApiClient",
    "FPLApiError",
    "FPLApiRepository",
    "free_transfers_from_history",
]
