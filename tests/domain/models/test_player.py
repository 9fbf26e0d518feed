"""Tests for player and team domain models."""

import pytest
from pydantic import ValidationError

from fpl_squad_advisor.domain.models.player import (
    AvailabilityStatus,
    PlayerDomain,
    Position,
)
from fpl_squad_advisor.domain.models.team import TeamDomain


def _element(**overrides):
    element = {
        "id": 233,
        "web_name": "Salah",
        "team": 12,
        "element_type": 3,
        "now_cost": 130,
        "total_points": 211,
        "goals_scored": 19,
        "assists": 12,
        "minutes": 3000,
        "clean_sheets": 10,
        "form": "7.2",
        "points_per_game": "6.8",
        "selected_by_percent": "45.1",
        "chance_of_playing_next_round": None,
        "status": "a",
    }
    element.update(overrides)
    return element


class TestPlayerFromApi:
    """Building players from bootstrap elements."""

    def test_valid_element(self):
        player = PlayerDomain.from_api(_element())

        assert player.player_id == 233
        assert player.position == Position.MID
        assert player.price == 13.0
        assert player.form_value == 7.2
        assert player.ppg_value == 6.8
        assert player.ownership == 45.1
        assert player.chance_of_playing_next_round is None
        assert player.status == AvailabilityStatus.AVAILABLE

    def test_malformed_numbers_become_zero(self):
        player = PlayerDomain.from_api(
            _element(total_points=None, form="", points_per_game=None, goals_scored="x")
        )

        assert player.total_points == 0
        assert player.form_value == 0.0
        assert player.ppg_value == 0.0
        assert player.goals_scored == 0

    def test_unknown_status_is_available(self):
        player = PlayerDomain.from_api(_element(status="z"))
        assert player.status == AvailabilityStatus.AVAILABLE

    def test_unknown_element_type_rejected(self):
        with pytest.raises(ValueError):
            PlayerDomain.from_api(_element(element_type=7))

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            PlayerDomain(player_id=1, web_name="  ", team_id=1, position=Position.DEF)

    def test_immutable(self):
        player = PlayerDomain.from_api(_element())
        with pytest.raises(ValidationError):
            player.now_cost = 10


class TestCombinedChance:
    """Status and chance of playing fold into one signal."""

    def test_unflagged_player_is_fully_available(self, make_player):
        player = make_player(1, status="a", chance_of_playing_next_round=0)
        assert player.combined_chance() == 100

    def test_flagged_player_without_chance_is_unavailable(self, make_player):
        player = make_player(1, status="i", chance_of_playing_next_round=None)
        assert player.combined_chance() == 0

    def test_flagged_player_uses_published_chance(self, make_player):
        player = make_player(1, status="i", chance_of_playing_next_round=75)
        assert player.combined_chance() == 75
        assert player.availability_chance == 75

    @pytest.mark.parametrize("chance", [None, 25, 75])
    def test_doubtful_player_is_not_flagged(self, make_player, chance):
        player = make_player(1, status="d", chance_of_playing_next_round=chance)
        assert not player.is_flagged
        assert player.combined_chance() == 100

    def test_custom_flagged_statuses(self, make_player):
        player = make_player(1, status="d", chance_of_playing_next_round=50)
        assert player.combined_chance(flagged_statuses=["i", "s"]) == 100
        assert player.combined_chance(flagged_statuses=["d"]) == 50


class TestTeamDomain:
    def test_from_api(self):
        team = TeamDomain.from_api({"id": 1, "name": "Arsenal", "short_name": "ARS"})
        assert team.team_id == 1
        assert team.short_name == "ARS"

    def test_short_name_length(self):
        with pytest.raises(ValidationError):
            TeamDomain(team_id=1, name="Arsenal", short_name="A")
