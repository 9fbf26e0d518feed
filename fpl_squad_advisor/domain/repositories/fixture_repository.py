"""Repository interface for fixture data access."""

from abc import ABC, abstractmethod
from typing import List

from ..common.result import Result
from ..models.fixture import FixtureDomain


class FixtureRepository(ABC):
    """Abstract repository for fixture data access."""

    @abstractmethod
    def get_fixtures(self) -> Result[List[FixtureDomain]]:
        """
        Get every fixture of the season, finished or not.

        Returns:
            Result containing list of fixtures or error information
        """
        pass
