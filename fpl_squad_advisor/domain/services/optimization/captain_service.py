"""Captain selection service for FPL optimization.

Captaincy is a straight ranking of the starting lineup by final score: the
best starter captains and the runner-up is vice-captain.
"""

from typing import List

from loguru import logger

from fpl_squad_advisor.domain.models.scoring import RankedPlayer
from fpl_squad_advisor.domain.models.selection import CaptainSelection

from .optimization_base import OptimizationBaseMixin


class CaptainServiceMixin(OptimizationBaseMixin):
    """Mixin providing captain selection functionality."""

    def select_captain_and_vice(
        self, starting: List[RankedPlayer]
    ) -> CaptainSelection:
        """Pick captain and vice-captain from a starting lineup.

        Args:
            starting: Starting players (any order)

        Returns:
            CaptainSelection; with a single starter the vice is the captain

        Raises:
            ValueError: If no starters are provided
        """
        if not starting:
            raise ValueError("No players provided for captain selection")

        ranked = sorted(starting, key=lambda p: p.final_score, reverse=True)
        captain = ranked[0]
        vice = ranked[1] if len(ranked) > 1 else ranked[0]

        reasoning = (
            f"{captain.web_name} ({captain.final_score:.0f} score, Rank #{captain.rank}) "
            f"is your captain. {vice.web_name} ({vice.final_score:.0f} score, "
            f"Rank #{vice.rank}) is vice-captain."
        )
        logger.info(f"🎯 Captain: {captain.web_name}, vice: {vice.web_name}")

        return CaptainSelection(
            captain=captain,
            vice_captain=vice,
            reasoning=reasoning,
            ranked_starters=ranked,
        )
