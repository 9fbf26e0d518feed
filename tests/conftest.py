"""Shared builders for FPL domain objects used across the test suite."""

import pytest

from fpl_squad_advisor.config import FPLConfig
from fpl_squad_advisor.domain.models.fixture import FixtureDomain, PlayerFixture
from fpl_squad_advisor.domain.models.player import PlayerDomain, Position
from fpl_squad_advisor.domain.models.team import TeamDomain
from fpl_squad_advisor.domain.services.optimization_service import OptimizationService


def _player(
    player_id,
    position=Position.MID,
    team_id=None,
    total_points=0,
    now_cost=0,
    form="0.0",
    points_per_game="0.0",
    goals_scored=0,
    assists=0,
    selected_by_percent="0.0",
    chance_of_playing_next_round=None,
    status="a",
    web_name=None,
):
    return PlayerDomain(
        player_id=player_id,
        web_name=web_name or f"Player{player_id}",
        team_id=team_id if team_id is not None else player_id,
        position=position,
        now_cost=now_cost,
        total_points=total_points,
        goals_scored=goals_scored,
        assists=assists,
        form=form,
        points_per_game=points_per_game,
        selected_by_percent=selected_by_percent,
        chance_of_playing_next_round=chance_of_playing_next_round,
        status=status,
    )


@pytest.fixture
def make_player():
    """Factory for PlayerDomain with neutral defaults (base score = 3 x points)."""
    return _player


@pytest.fixture
def make_team():
    def _team(team_id, short_name=None, name=None):
        short = short_name or f"T{team_id:02d}"
        return TeamDomain(team_id=team_id, name=name or f"Team {team_id}", short_name=short)

    return _team


@pytest.fixture
def make_fixture():
    def _fixture(
        fixture_id,
        home,
        away,
        event=1,
        home_difficulty=3,
        away_difficulty=3,
        finished=False,
    ):
        return FixtureDomain(
            fixture_id=fixture_id,
            event=event,
            home_team_id=home,
            away_team_id=away,
            home_difficulty=home_difficulty,
            away_difficulty=away_difficulty,
            finished=finished,
        )

    return _fixture


@pytest.fixture
def next_fixture():
    def _next(difficulty, is_home=True, opponent="OPP", event=1):
        return PlayerFixture(
            opponent=opponent, difficulty=difficulty, is_home=is_home, event=event
        )

    return _next


@pytest.fixture
def no_fixtures():
    """Fixture lookup for a world with no remaining fixtures."""
    return lambda player_id: []


# Total points per squad member; with no fixtures every final score is 3x these.
# The best lineup is 3-5-2 (GK 60 + DEF 50/48/46 + MID 70..62 + FWD 80/78).
SQUAD_POINTS = [
    (1, Position.GKP, 60),
    (2, Position.GKP, 30),
    (3, Position.DEF, 50),
    (4, Position.DEF, 48),
    (5, Position.DEF, 46),
    (6, Position.DEF, 10),
    (7, Position.DEF, 8),
    (8, Position.MID, 70),
    (9, Position.MID, 68),
    (10, Position.MID, 66),
    (11, Position.MID, 64),
    (12, Position.MID, 62),
    (13, Position.FWD, 80),
    (14, Position.FWD, 78),
    (15, Position.FWD, 5),
]


@pytest.fixture
def standard_squad():
    """Canonical 2 GK / 5 DEF / 5 MID / 3 FWD squad, one club per player."""
    return [
        _player(pid, position=position, total_points=points, now_cost=50)
        for pid, position, points in SQUAD_POINTS
    ]


@pytest.fixture
def settings():
    """Default configuration without retry back-off."""
    return FPLConfig(api={"retry_backoff_seconds": 0.0})


@pytest.fixture
def optimization_service(settings):
    return OptimizationService(settings)
