"""Data orchestration service: assembles a consistent gameweek snapshot."""

from typing import Dict, Iterable, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from fpl_squad_advisor.config import FPLConfig, config
from fpl_squad_advisor.domain.common.result import DomainError, Result
from fpl_squad_advisor.domain.models.chip import ChipUsage
from fpl_squad_advisor.domain.models.fixture import FixtureDomain
from fpl_squad_advisor.domain.models.player import PlayerDomain
from fpl_squad_advisor.domain.models.squad import SquadSnapshot
from fpl_squad_advisor.domain.models.team import TeamDomain
from fpl_squad_advisor.domain.repositories.fixture_repository import FixtureRepository
from fpl_squad_advisor.domain.repositories.manager_repository import ManagerRepository
from fpl_squad_advisor.domain.repositories.player_repository import PlayerRepository
from fpl_squad_advisor.domain.repositories.team_repository import TeamRepository


class GameweekSnapshot(BaseModel):
    """Everything the decision core needs, fetched as one consistent unit."""

    model_config = ConfigDict(frozen=True)

    players: List[PlayerDomain] = Field(..., description="Every player in the game")
    teams: List[TeamDomain] = Field(..., description="Every club")
    fixtures: List[FixtureDomain] = Field(..., description="Every fixture, any state")
    squad: SquadSnapshot = Field(..., description="The manager's squad")
    chip_history: List[ChipUsage] = Field(default_factory=list)

    @property
    def current_event(self) -> int:
        return self.squad.current_event

    def players_by_id(self) -> Dict[int, PlayerDomain]:
        return {p.player_id: p for p in self.players}


class DataOrchestrationService:
    """Service for orchestrating data loading for a manager's gameweek."""

    def __init__(
        self,
        player_repository: PlayerRepository,
        team_repository: TeamRepository,
        fixture_repository: FixtureRepository,
        manager_repository: ManagerRepository,
        settings: Optional[FPLConfig] = None,
    ):
        self.player_repository = player_repository
        self.team_repository = team_repository
        self.fixture_repository = fixture_repository
        self.manager_repository = manager_repository
        self.config = settings or config

    def load_snapshot(
        self, manager_id: int, free_transfers: Optional[int] = None
    ) -> Result[GameweekSnapshot]:
        """Load players, teams, fixtures, squad and chip history.

        Sub-fetches run in order and the first failure is returned as is, so
        callers never receive a partial snapshot.

        Args:
            manager_id: FPL entry ID
            free_transfers: Override for the free transfer count

        Returns:
            Result containing the snapshot, or the first sub-fetch error
        """
        players_result = self.player_repository.get_current_players()
        if players_result.is_failure:
            return Result.failure(players_result.error)

        teams_result = self.team_repository.get_current_teams()
        if teams_result.is_failure:
            return Result.failure(teams_result.error)

        fixtures_result = self.fixture_repository.get_fixtures()
        if fixtures_result.is_failure:
            return Result.failure(fixtures_result.error)

        squad_result = self.manager_repository.get_squad_snapshot(
            manager_id, free_transfers=free_transfers
        )
        if squad_result.is_failure:
            return Result.failure(squad_result.error)

        history_result = self.manager_repository.get_chip_history(manager_id)
        if history_result.is_failure:
            return Result.failure(history_result.error)

        players = players_result.value
        known_ids = {p.player_id for p in players}
        missing = [pid for pid in squad_result.value.player_ids if pid not in known_ids]
        if missing:
            return Result.failure(
                DomainError.data_not_found(
                    f"Squad players missing from the player list: {missing}",
                    details={"source": "picks", "missing_player_ids": missing},
                )
            )

        snapshot = GameweekSnapshot(
            players=players,
            teams=teams_result.value,
            fixtures=fixtures_result.value,
            squad=squad_result.value,
            chip_history=history_result.value,
        )
        logger.info(
            f"📦 Snapshot for manager {manager_id}: GW{snapshot.current_event}, "
            f"{len(players)} players, {len(snapshot.fixtures)} fixtures"
        )
        return Result.success(snapshot)

    def load_recent_points(self, player_ids: Iterable[int]) -> Dict[int, int]:
        """Best-effort recent points; an empty mapping when the fetch fails."""
        result = self.player_repository.get_recent_points(player_ids)
        if result.is_failure:
            logger.warning(f"⚠️ Recent points unavailable: {result.error.message}")
        return result.value_or({})
