"""Tests for DataOrchestrationService snapshot assembly."""

from unittest.mock import Mock

import pytest

from fpl_squad_advisor.domain.common.result import (
    DomainError,
    ErrorType,
    FetchFailure,
    Result,
)
from fpl_squad_advisor.domain.models.chip import ChipKind, ChipUsage
from fpl_squad_advisor.domain.models.squad import SquadSlot, SquadSnapshot
from fpl_squad_advisor.domain.services.data_orchestration_service import (
    DataOrchestrationService,
)


def _snapshot(player_ids, current_event=12):
    return SquadSnapshot(
        manager_id=42,
        current_event=current_event,
        slots=[
            SquadSlot(player_id=pid, slot_position=i + 1)
            for i, pid in enumerate(player_ids)
        ],
        bank=5,
        free_transfers=2,
    )


@pytest.fixture
def repositories(standard_squad, make_team, make_fixture):
    players = Mock()
    players.get_current_players.return_value = Result.success(standard_squad)
    players.get_recent_points.return_value = Result.success({1: 12})

    teams = Mock()
    teams.get_current_teams.return_value = Result.success(
        [make_team(i) for i in range(1, 16)]
    )

    fixtures = Mock()
    fixtures.get_fixtures.return_value = Result.success([make_fixture(1, 1, 2)])

    manager = Mock()
    manager.get_squad_snapshot.return_value = Result.success(
        _snapshot([p.player_id for p in standard_squad])
    )
    manager.get_chip_history.return_value = Result.success(
        [ChipUsage(chip=ChipKind.WILDCARD, event=3)]
    )
    return players, teams, fixtures, manager


@pytest.fixture
def service(repositories, settings):
    return DataOrchestrationService(*repositories, settings=settings)


def _api_failure(source):
    return Result.failure(
        DomainError.external_api_error(
            f"{source} request timed out", source=source, failure=FetchFailure.TIMEOUT
        )
    )


class TestLoadSnapshot:
    def test_success(self, service, repositories):
        result = service.load_snapshot(42)

        assert result.is_success
        snapshot = result.value
        assert snapshot.current_event == 12
        assert len(snapshot.players) == 15
        assert snapshot.chip_history[0].chip == ChipKind.WILDCARD
        assert snapshot.players_by_id()[13].web_name == "Player13"
        repositories[3].get_squad_snapshot.assert_called_once_with(42, free_transfers=None)

    def test_free_transfer_override_is_forwarded(self, service, repositories):
        service.load_snapshot(42, free_transfers=3)
        repositories[3].get_squad_snapshot.assert_called_once_with(42, free_transfers=3)

    def test_first_failure_is_returned(self, service, repositories):
        players, teams, fixtures, manager = repositories
        fixtures.get_fixtures.return_value = _api_failure("fixtures")

        result = service.load_snapshot(42)

        assert result.is_failure
        assert result.error.error_type == ErrorType.EXTERNAL_API_ERROR
        assert result.error.source == "fixtures"
        assert result.error.is_retryable
        manager.get_squad_snapshot.assert_not_called()

    def test_history_failure_fails_the_snapshot(self, service, repositories):
        repositories[3].get_chip_history.return_value = _api_failure("history")

        result = service.load_snapshot(42)

        assert result.is_failure
        assert result.error.source == "history"

    def test_unknown_squad_player(self, service, repositories, standard_squad):
        ids = [p.player_id for p in standard_squad][:14] + [999]
        repositories[3].get_squad_snapshot.return_value = Result.success(_snapshot(ids))

        result = service.load_snapshot(42)

        assert result.is_failure
        assert result.error.error_type == ErrorType.DATA_NOT_FOUND
        assert result.error.details["missing_player_ids"] == [999]


class TestLoadRecentPoints:
    def test_success(self, service):
        assert service.load_recent_points([1, 2]) == {1: 12}

    def test_failure_gives_empty_mapping(self, service, repositories):
        repositories[0].get_recent_points.return_value = _api_failure("element-summary")
        assert service.load_recent_points([1, 2]) == {}
