"""Base utilities for FPL lineup and transfer optimization.

This module contains shared functionality used across all optimization modules:
- Scoring and ranking a pool through the performance scorer
- Formation enumeration
- Team quota helpers
"""

from typing import Dict, Iterable, List, Optional, Tuple

from fpl_squad_advisor.config import config
from fpl_squad_advisor.domain.common.result import SquadCompositionError
from fpl_squad_advisor.domain.models.player import PlayerDomain, Position
from fpl_squad_advisor.domain.models.scoring import RankedPlayer
from fpl_squad_advisor.domain.models.selection import VALID_FORMATIONS, Formation
from fpl_squad_advisor.domain.services.scoring_service import (
    FixtureLookupFn,
    PerformanceScoringService,
)


class OptimizationBaseMixin:
    """Mixin providing shared optimization utilities.

    Expects the composing class to set ``self.config`` (an FPLConfig) and may
    set ``self.scoring``; a scorer bound to the same config is created lazily
    otherwise.
    """

    @property
    def scorer(self) -> PerformanceScoringService:
        scoring = getattr(self, "scoring", None)
        if scoring is None:
            scoring = PerformanceScoringService(getattr(self, "config", None) or config)
            self.scoring = scoring
        return scoring

    def rank_players(
        self, players: Iterable[PlayerDomain], fixture_lookup: FixtureLookupFn
    ) -> List[RankedPlayer]:
        """Score players and rank them as a single pool."""
        return self.scorer.score_and_rank(players, fixture_lookup)

    def combined_chance(self, player: PlayerDomain) -> int:
        return self.scorer.combined_chance(player)

    def _group_by_position(
        self, players: Iterable[RankedPlayer]
    ) -> Dict[Position, List[RankedPlayer]]:
        """Group players by position, each group sorted by final score (stable)."""
        by_position: Dict[Position, List[RankedPlayer]] = {
            position: [] for position in Position
        }
        for player in players:
            by_position[player.position].append(player)
        for position in by_position:
            by_position[position].sort(key=lambda p: p.final_score, reverse=True)
        return by_position

    def _enumerate_formations_for_players(
        self, by_position: Dict[Position, List[RankedPlayer]]
    ) -> Tuple[List[RankedPlayer], Formation, float]:
        """Core formation enumeration logic.

        Evaluates every legal formation the position groups can fill and keeps
        the one with the highest summed final score. Earlier formations win ties.

        Args:
            by_position: Players grouped by position, best first

        Returns:
            Tuple of (best_11_players, formation, total_score)

        Raises:
            SquadCompositionError: If no legal formation can be fielded
        """
        best_11: List[RankedPlayer] = []
        best_formation: Optional[Formation] = None
        best_score = 0.0

        if by_position[Position.GKP]:
            for formation in VALID_FORMATIONS:
                if (
                    formation.defenders <= len(by_position[Position.DEF])
                    and formation.midfielders <= len(by_position[Position.MID])
                    and formation.forwards <= len(by_position[Position.FWD])
                ):
                    formation_11 = (
                        by_position[Position.GKP][:1]
                        + by_position[Position.DEF][: formation.defenders]
                        + by_position[Position.MID][: formation.midfielders]
                        + by_position[Position.FWD][: formation.forwards]
                    )
                    formation_score = sum(p.final_score for p in formation_11)

                    if best_formation is None or formation_score > best_score:
                        best_score = formation_score
                        best_11 = formation_11
                        best_formation = formation

        if best_formation is None:
            counts = {pos.value: len(group) for pos, group in by_position.items()}
            raise SquadCompositionError(
                f"No legal formation can be fielded from squad composition {counts}"
            )

        return best_11, best_formation, best_score

    def _count_players_per_team(self, squad: Iterable) -> Dict[int, int]:
        """Count squad players per club.

        Args:
            squad: Players (PlayerDomain or RankedPlayer) exposing ``team_id``

        Returns:
            Dictionary mapping club ID to player count
        """
        team_counts: Dict[int, int] = {}
        for player in squad:
            team_counts[player.team_id] = team_counts.get(player.team_id, 0) + 1
        return team_counts
