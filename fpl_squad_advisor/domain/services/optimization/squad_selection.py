"""Squad selection utilities for FPL optimization.

This module handles:
- Starting XI selection with formation optimization
- Bench ordering
- The all-fifteen variant used when the bench boost is active
"""

from typing import Iterable

from loguru import logger

from fpl_squad_advisor.domain.models.player import PlayerDomain
from fpl_squad_advisor.domain.models.scoring import RankedPlayer
from fpl_squad_advisor.domain.models.selection import TeamSelection
from fpl_squad_advisor.domain.services.scoring_service import FixtureLookupFn

from .optimization_base import OptimizationBaseMixin


class SquadSelectionMixin(OptimizationBaseMixin):
    """Mixin providing squad selection functionality.

    Handles starting XI selection and bench ordering.
    Inherits shared utilities from OptimizationBaseMixin.
    """

    def select_optimal_starting_11(
        self, squad: Iterable[PlayerDomain], fixture_lookup: FixtureLookupFn
    ) -> TeamSelection:
        """Find the best starting 11 from a squad.

        The squad is scored and ranked as its own pool, so rank penalties are
        relative to the other squad members.

        Args:
            squad: Squad players (normally 15)
            fixture_lookup: player_id -> upcoming fixtures

        Returns:
            TeamSelection with 11 starters and the rest on the bench

        Raises:
            SquadCompositionError: If no legal formation can be fielded
        """
        ranked = self.rank_players(squad, fixture_lookup)
        return self.select_from_ranked(ranked)

    def select_from_ranked(self, ranked: Iterable[RankedPlayer]) -> TeamSelection:
        """Pick the best starting 11 from players that already carry final scores.

        Args:
            ranked: Squad players ranked as part of some pool

        Returns:
            TeamSelection with 11 starters and the rest on the bench
        """
        ranked = list(ranked)
        by_position = self._group_by_position(ranked)
        starting, formation, score = self._enumerate_formations_for_players(
            by_position
        )

        starting_ids = {p.player_id for p in starting}
        bench = sorted(
            (p for p in ranked if p.player_id not in starting_ids),
            key=lambda p: p.final_score,
            reverse=True,
        )

        logger.debug(f"⚽ Best formation {formation.label} scores {score:.1f}")
        return TeamSelection(
            starting=starting,
            bench=bench,
            formation=formation,
            formation_score=score,
        )

    def select_all_fifteen(
        self, squad: Iterable[PlayerDomain], fixture_lookup: FixtureLookupFn
    ) -> TeamSelection:
        """Bench boost variant: every squad player starts.

        Rank and penalties are still computed over the squad; no formation
        applies and the score is the sum of all final scores.
        """
        ranked = self.rank_players(squad, fixture_lookup)
        starting = sorted(ranked, key=lambda p: p.final_score, reverse=True)
        score = sum(p.final_score for p in starting)

        logger.debug(f"🪑 Bench boost lineup of {len(starting)} scores {score:.1f}")
        return TeamSelection(
            starting=starting,
            bench=[],
            formation=None,
            formation_score=score,
            is_bench_boost=True,
        )
