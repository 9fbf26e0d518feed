"""Tests for the command line interface with the API repository stubbed out."""

from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from fpl_squad_advisor.domain.common.result import DomainError, FetchFailure, Result
from fpl_squad_advisor.domain.models.chip import ChipKind, ChipUsage
from fpl_squad_advisor.domain.models.squad import SquadSlot, SquadSnapshot
from fpl_squad_advisor.interfaces.cli import app

runner = CliRunner()


@pytest.fixture
def repository(standard_squad, make_team):
    repo = Mock()
    repo.get_current_players.return_value = Result.success(standard_squad)
    repo.get_current_teams.return_value = Result.success(
        [make_team(i) for i in range(1, 16)]
    )
    repo.get_fixtures.return_value = Result.success([])
    repo.get_squad_snapshot.return_value = Result.success(
        SquadSnapshot(
            manager_id=42,
            current_event=17,
            slots=[SquadSlot(player_id=i, slot_position=i) for i in range(1, 16)],
            bank=0,
            free_transfers=1,
        )
    )
    repo.get_chip_history.return_value = Result.success(
        [ChipUsage(chip=ChipKind.WILDCARD, event=5)]
    )
    repo.get_recent_points.return_value = Result.success({13: 21})
    with patch("fpl_squad_advisor.interfaces.cli.FPLApiRepository", return_value=repo):
        yield repo


class TestRecommendCommand:
    def test_prints_lineup_and_captain(self, repository):
        result = runner.invoke(app, ["recommend", "42"])

        assert result.exit_code == 0, result.output
        assert "3-5-2" in result.output
        assert "is your captain" in result.output
        assert "No transfers recommended" in result.output

    def test_recent_points_can_be_skipped(self, repository):
        result = runner.invoke(app, ["recommend", "42", "--no-recent"])

        assert result.exit_code == 0, result.output
        repository.get_recent_points.assert_not_called()

    def test_bench_boost(self, repository):
        result = runner.invoke(app, ["recommend", "42", "--bench-boost"])

        assert result.exit_code == 0, result.output
        assert "Bench Boost" in result.output

    def test_invalid_target_gameweek(self, repository):
        result = runner.invoke(app, ["recommend", "42", "--target-gw", "40"])

        assert result.exit_code == 1
        repository.get_current_players.assert_not_called()

    def test_fetch_failure(self, repository):
        repository.get_current_players.return_value = Result.failure(
            DomainError.external_api_error(
                "bootstrap request timed out",
                source="bootstrap",
                failure=FetchFailure.TIMEOUT,
            )
        )

        result = runner.invoke(app, ["recommend", "42"])

        assert result.exit_code == 1
        assert "Failed fetch: bootstrap" in result.output


class TestChipsCommand:
    def test_prints_plan(self, repository):
        result = runner.invoke(app, ["chips", "42"])

        assert result.exit_code == 0, result.output
        assert "Chip plan from GW17" in result.output
        assert "Wildcard" not in result.output
        repository.get_squad_snapshot.assert_called_once_with(42, free_transfers=1)
