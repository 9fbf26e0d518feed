"""Repository interface for team data access."""

from abc import ABC, abstractmethod
from typing import List

from ..common.result import Result
from ..models.team import TeamDomain


class TeamRepository(ABC):
    """Abstract repository for team data access."""

    @abstractmethod
    def get_current_teams(self) -> Result[List[TeamDomain]]:
        """
        Get all Premier League teams for the current season.

        Returns:
            Result containing list of teams or error information
        """
        pass
