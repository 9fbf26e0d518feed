"""Repository interface for manager (entry) data access."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..common.result import Result
from ..models.chip import ChipUsage
from ..models.squad import SquadSnapshot


class ManagerRepository(ABC):
    """Abstract repository for a manager's squad and chip history."""

    @abstractmethod
    def get_squad_snapshot(
        self, manager_id: int, free_transfers: Optional[int] = None
    ) -> Result[SquadSnapshot]:
        """
        Get the manager's squad for their current gameweek.

        Args:
            manager_id: FPL entry ID
            free_transfers: Override for the free transfer count, which the
                public endpoints do not publish

        Returns:
            Result containing the squad snapshot or error information
        """
        pass

    @abstractmethod
    def get_chip_history(self, manager_id: int) -> Result[List[ChipUsage]]:
        """
        Get every chip the manager has played this season.

        Args:
            manager_id: FPL entry ID

        Returns:
            Result containing chip usages in gameweek order or error information
        """
        pass
