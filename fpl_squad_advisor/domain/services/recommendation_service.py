"""Recommendation service: the full gameweek decision pipeline.

Runs the fixture resolver, optimizer, transfer search and captaincy selector
over one snapshot and bundles the results for a presentation layer.
"""

from typing import Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from fpl_squad_advisor.config import FPLConfig, config
from fpl_squad_advisor.domain.common.result import SquadCompositionError
from fpl_squad_advisor.domain.models.fixture import FixtureDomain
from fpl_squad_advisor.domain.models.player import PlayerDomain
from fpl_squad_advisor.domain.models.scoring import RankedPlayer
from fpl_squad_advisor.domain.models.selection import CaptainSelection, TeamSelection
from fpl_squad_advisor.domain.models.squad import SquadSnapshot
from fpl_squad_advisor.domain.models.team import TeamDomain
from fpl_squad_advisor.domain.models.transfer import Transfer

from .fixture_analysis_service import FixtureAnalysisService
from .optimization_service import OptimizationService


class Recommendation(BaseModel):
    """Gameweek advice for one manager."""

    model_config = ConfigDict(frozen=True)

    current_selection: TeamSelection = Field(
        ..., description="Best lineup from the squad as it stands"
    )
    transfers: List[Transfer] = Field(default_factory=list)
    selection: TeamSelection = Field(..., description="Best lineup after transfers")
    captaincy: CaptainSelection
    weak_players: List[RankedPlayer] = Field(
        default_factory=list, description="Weak current starters, weakest first"
    )
    transfer_targets: List[RankedPlayer] = Field(
        default_factory=list, description="Distinct incoming players"
    )
    bank: int = Field(..., description="Money in the bank (tenths)")
    free_transfers: int
    recent_points: Dict[int, int] = Field(
        default_factory=dict,
        description="Recent points per squad player, estimated from form when missing",
    )

    @property
    def num_transfers(self) -> int:
        return len(self.transfers)


class RecommendationService:
    """Service producing lineup, transfer and captaincy advice."""

    def __init__(
        self,
        settings: Optional[FPLConfig] = None,
        optimization_service: Optional[OptimizationService] = None,
        fixture_service: Optional[FixtureAnalysisService] = None,
    ):
        self.config = settings or config
        self.optimization = optimization_service or OptimizationService(self.config)
        self.fixtures = fixture_service or FixtureAnalysisService(self.config)

    def resolve_squad(
        self, snapshot: SquadSnapshot, players: List[PlayerDomain]
    ) -> List[PlayerDomain]:
        """Squad players in slot order.

        Raises:
            SquadCompositionError: If a slot references an unknown player
        """
        by_id = {p.player_id: p for p in players}
        missing = [pid for pid in snapshot.player_ids if pid not in by_id]
        if missing:
            raise SquadCompositionError(
                f"Squad players missing from the player list: {missing}"
            )
        return [by_id[pid] for pid in snapshot.player_ids]

    def find_weak_players(self, starting: List[RankedPlayer]) -> List[RankedPlayer]:
        """Starters with poor form, doubtful availability or a low final score."""
        transfers = self.config.transfers
        weak = [
            p
            for p in starting
            if p.player.form_value < transfers.weak_form_threshold
            or self.optimization.combined_chance(p.player)
            < transfers.injury_reasoning_threshold
            or p.final_score < transfers.weak_score_threshold
        ]
        return sorted(weak, key=lambda p: p.final_score)

    def estimate_recent_points(
        self,
        players: List[RankedPlayer],
        recent_points: Optional[Dict[int, int]] = None,
    ) -> Dict[int, int]:
        """Recent points per player, falling back to form x multiplier."""
        recent_points = recent_points or {}
        multiplier = self.config.transfers.recent_form_multiplier
        return {
            p.player_id: recent_points.get(
                p.player_id, round(p.player.form_value * multiplier)
            )
            for p in players
        }

    def _select(self, squad, lookup, use_bench_boost: bool) -> TeamSelection:
        if use_bench_boost:
            return self.optimization.select_all_fifteen(squad, lookup)
        return self.optimization.select_optimal_starting_11(squad, lookup)

    def generate_recommendations(
        self,
        snapshot: SquadSnapshot,
        players: List[PlayerDomain],
        teams: List[TeamDomain],
        fixtures: List[FixtureDomain],
        *,
        fixture_window: Optional[int] = None,
        target_round: Optional[int] = None,
        user_override_count: Optional[int] = None,
        use_bench_boost: bool = False,
        recent_points: Optional[Dict[int, int]] = None,
    ) -> Recommendation:
        """Run the full decision pipeline for a manager's squad.

        Args:
            snapshot: The manager's squad, bank and free transfers
            players: Every player in the game (squad members and candidates)
            teams: Every club
            fixtures: Every fixture; finished ones are ignored
            fixture_window: Fixtures looked ahead per player
            target_round: Ignore fixtures before this gameweek
            user_override_count: Transfer count chosen by the user
            use_bench_boost: Plan with every squad player starting
            recent_points: Known recent points per player

        Returns:
            Recommendation bundling lineups, transfers and captaincy

        Raises:
            SquadCompositionError: If the squad cannot be resolved or fielded
        """
        squad = self.resolve_squad(snapshot, players)
        upcoming = self.fixtures.upcoming_fixtures(fixtures, from_round=target_round)
        lookup = self.fixtures.build_fixture_lookup(
            players, upcoming, teams, window=fixture_window
        )

        current = self._select(squad, lookup, use_bench_boost)
        transfers = self.optimization.generate_transfer_suggestions(
            squad=squad,
            candidate_pool=players,
            budget=snapshot.bank,
            free_transfers=snapshot.free_transfers,
            fixture_lookup=lookup,
            user_override_count=user_override_count,
        )

        post_transfer_squad = self.optimization.apply_transfers(squad, transfers)
        selection = self._select(post_transfer_squad, lookup, use_bench_boost)
        captaincy = self.optimization.select_captain_and_vice(selection.starting)

        targets: List[RankedPlayer] = []
        seen = set()
        for transfer in transfers:
            if transfer.player_in.player_id not in seen:
                seen.add(transfer.player_in.player_id)
                targets.append(transfer.player_in)

        logger.info(
            f"📋 Recommendation: {selection.formation_label}, "
            f"{len(transfers)} transfer(s), captain {captaincy.captain.web_name}"
        )
        return Recommendation(
            current_selection=current,
            transfers=transfers,
            selection=selection,
            captaincy=captaincy,
            weak_players=self.find_weak_players(current.starting),
            transfer_targets=targets,
            bank=snapshot.bank,
            free_transfers=snapshot.free_transfers,
            recent_points=self.estimate_recent_points(selection.squad, recent_points),
        )
