"""Repository interface for player data access."""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from ..common.result import Result
from ..models.player import PlayerDomain


class PlayerRepository(ABC):
    """
    Abstract repository for player data access.

    Provides a consistent interface for accessing player data regardless
    of the underlying data source (API, cache, fixtures in tests, etc.).
    """

    @abstractmethod
    def get_current_players(self) -> Result[List[PlayerDomain]]:
        """
        Get all current players for the season.

        Returns:
            Result containing list of players or error information
        """
        pass

    @abstractmethod
    def get_recent_points(self, player_ids: Iterable[int]) -> Result[Dict[int, int]]:
        """
        Get points summed over each player's most recent rounds.

        Players whose history cannot be fetched are left out of the mapping;
        the consumer is expected to fall back to a form-based estimate.

        Args:
            player_ids: Players to look up, in priority order

        Returns:
            Result containing player_id -> recent points, or error information
        """
        pass
