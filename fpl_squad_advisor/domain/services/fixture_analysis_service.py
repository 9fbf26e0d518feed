"""Fixture analysis service: resolves upcoming fixtures from each player's side."""

from typing import Dict, Iterable, List, Optional

from loguru import logger

from fpl_squad_advisor.config import FPLConfig, config
from fpl_squad_advisor.domain.models.fixture import FixtureDomain, PlayerFixture
from fpl_squad_advisor.domain.models.player import PlayerDomain
from fpl_squad_advisor.domain.models.team import TeamDomain
from fpl_squad_advisor.utils.helpers import difficulty_label

# Unscheduled fixtures (no gameweek yet) sort after every scheduled round
_UNSCHEDULED_ROUND = 99


def _round_key(fixture: FixtureDomain) -> int:
    return fixture.event if fixture.event is not None else _UNSCHEDULED_ROUND


class FixtureLookup:
    """
    Callable mapping player_id -> upcoming PlayerFixtures.

    Results are memoised per club, since every player of a club shares the
    same schedule. Unknown players resolve to an empty list.
    """

    def __init__(
        self,
        service: "FixtureAnalysisService",
        players: Iterable[PlayerDomain],
        fixtures: List[FixtureDomain],
        teams: List[TeamDomain],
        window: int,
    ):
        self._service = service
        self._team_by_player: Dict[int, int] = {p.player_id: p.team_id for p in players}
        self._fixtures = fixtures
        self._teams = teams
        self._window = window
        self._by_team: Dict[int, List[PlayerFixture]] = {}

    def __call__(self, player_id: int) -> List[PlayerFixture]:
        team_id = self._team_by_player.get(player_id)
        if team_id is None:
            return []
        return self.for_team(team_id)

    def for_team(self, team_id: int) -> List[PlayerFixture]:
        if team_id not in self._by_team:
            self._by_team[team_id] = self._service.resolve_player_fixtures(
                team_id, self._fixtures, self._teams, window=self._window
            )
        return list(self._by_team[team_id])


class FixtureAnalysisService:
    """Service for resolving and describing upcoming fixtures."""

    def __init__(self, settings: Optional[FPLConfig] = None):
        """Initialize the service with configuration.

        Args:
            settings: Configuration override (defaults to the global config)
        """
        self.config = settings or config

    def upcoming_fixtures(
        self, fixtures: Iterable[FixtureDomain], from_round: Optional[int] = None
    ) -> List[FixtureDomain]:
        """Unfinished fixtures in round order, capped to the configured maximum.

        Args:
            fixtures: Every fixture of the season
            from_round: Drop fixtures scheduled before this gameweek

        Returns:
            Ordered list of upcoming fixtures
        """
        remaining = [f for f in fixtures if not f.finished]
        if from_round is not None:
            remaining = [
                f for f in remaining if f.event is None or f.event >= from_round
            ]
        remaining.sort(key=_round_key)
        return remaining[: self.config.fixtures.max_upcoming_fixtures]

    def resolve_player_fixtures(
        self,
        team_id: int,
        fixtures: Iterable[FixtureDomain],
        teams: Iterable[TeamDomain],
        window: Optional[int] = None,
    ) -> List[PlayerFixture]:
        """Resolve a club's upcoming fixtures from its own side.

        Args:
            team_id: The player's club
            fixtures: Fixtures already filtered to unfinished ones
            teams: All clubs, used for opponent short names
            window: Look-ahead size (defaults to config.fixtures.fixture_window)

        Returns:
            Earliest fixtures first, at most `window` of them; empty when none remain
        """
        window = window if window is not None else self.config.fixtures.fixture_window
        short_names = {t.team_id: t.short_name for t in teams}
        unknown = self.config.fixtures.unknown_opponent

        involved = sorted(
            (f for f in fixtures if team_id in f.involves_team), key=_round_key
        )
        return [
            PlayerFixture(
                opponent=short_names.get(f.get_opponent(team_id), unknown),
                difficulty=f.get_difficulty(team_id),
                is_home=f.is_home_fixture(team_id),
                event=f.event,
            )
            for f in involved[:window]
        ]

    def build_fixture_lookup(
        self,
        players: Iterable[PlayerDomain],
        fixtures: List[FixtureDomain],
        teams: List[TeamDomain],
        window: Optional[int] = None,
    ) -> FixtureLookup:
        """Create a memoised player_id -> fixtures lookup over upcoming fixtures."""
        window = window if window is not None else self.config.fixtures.fixture_window
        lookup = FixtureLookup(self, players, fixtures, teams, window)
        logger.debug(
            f"📅 Fixture lookup built over {len(fixtures)} fixtures (window {window})"
        )
        return lookup

    @staticmethod
    def difficulty_label(difficulty: Optional[int]) -> str:
        """Human-readable difficulty rating."""
        return difficulty_label(difficulty)

    @staticmethod
    def format_fixture_run(fixtures: List[PlayerFixture]) -> str:
        """Compact text such as 'ARS(H) 4, CHE(A) 3'."""
        return ", ".join(
            f"{f.opponent}({'H' if f.is_home else 'A'}) {f.difficulty}"
            for f in fixtures
        )

    @staticmethod
    def average_difficulty(fixtures: List[PlayerFixture]) -> Optional[float]:
        """Mean difficulty of a fixture run, None when empty."""
        if not fixtures:
            return None
        return sum(f.difficulty for f in fixtures) / len(fixtures)
