"""Tests for DataFrame display helpers."""

import pandas as pd
import pytest

from fpl_squad_advisor.domain.models.chip import ChipKind, ChipStrategy, ChipSuggestion
from fpl_squad_advisor.domain.models.player import Position
from fpl_squad_advisor.interfaces.display_utils import (
    DataContractError,
    chip_strategy_to_dataframe,
    players_to_dataframe,
    resolve_team_names,
    selection_to_dataframe,
    transfers_to_dataframe,
)


@pytest.fixture
def teams(make_team):
    return [make_team(i) for i in range(1, 16)] + [make_team(100, "NEW")]


class TestResolveTeamNames:
    def test_maps_short_names(self, make_team):
        df = pd.DataFrame({"team_id": [1, 2]})
        result = resolve_team_names(df, [make_team(1, "ARS"), make_team(2, "CHE")])
        assert list(result["Team"]) == ["ARS", "CHE"]
        assert "Team" not in df.columns

    def test_missing_column(self, make_team):
        with pytest.raises(DataContractError, match="No team column"):
            resolve_team_names(pd.DataFrame({"team": [1]}), [make_team(1)])

    def test_unknown_team(self, make_team):
        with pytest.raises(DataContractError, match="Missing team IDs"):
            resolve_team_names(pd.DataFrame({"team_id": [1, 9]}), [make_team(1)])


class TestSelectionDataFrame:
    def test_rows_and_markers(
        self, optimization_service, standard_squad, no_fixtures, teams
    ):
        selection = optimization_service.select_optimal_starting_11(
            standard_squad, no_fixtures
        )
        captaincy = optimization_service.select_captain_and_vice(selection.starting)

        df = selection_to_dataframe(
            selection, teams, captaincy=captaincy, recent_points={13: 18}
        )

        assert len(df) == 15
        assert list(df["Role"]).count("Start") == 11
        assert "Player13 (C)" in list(df["Player"])
        assert "Player14 (V)" in list(df["Player"])
        assert df.loc[df["Player"] == "Player13 (C)", "Last 3"].iloc[0] == 18
        assert list(df.columns)[-1] == "Last 3"

    def test_without_extras(self, optimization_service, standard_squad, no_fixtures, teams):
        selection = optimization_service.select_all_fifteen(standard_squad, no_fixtures)

        df = selection_to_dataframe(selection, teams)

        assert set(df["Role"]) == {"Start"}
        assert "Last 3" not in df.columns
        assert df["Next"].iloc[0] == "-"


class TestOtherTables:
    def test_players_dataframe(self, optimization_service, standard_squad, no_fixtures, teams):
        ranked = optimization_service.rank_players(standard_squad, no_fixtures)

        df = players_to_dataframe(ranked[:3], teams)

        assert list(df["Player"]) == ["Player13", "Player14", "Player8"]
        assert df["Price"].iloc[0] == "£5.0m"
        assert df["Penalty"].iloc[0] == "NONE (Top 10 - Elite)"

    def test_players_dataframe_fixture_run(
        self, optimization_service, make_player, next_fixture, teams
    ):
        run = [
            next_fixture(2, opponent="ARS"),
            next_fixture(5, is_home=False, opponent="LIV", event=2),
        ]
        players = [make_player(1, total_points=50), make_player(2, total_points=40)]
        ranked = optimization_service.rank_players(
            players, lambda player_id: run if player_id == 1 else []
        )

        df = players_to_dataframe(ranked, teams)

        assert df["Run"].iloc[0] == "ARS(H) 2, LIV(A) 5"
        assert df["Avg FDR"].iloc[0] == 3.5
        assert df["Run"].iloc[1] == ""
        assert pd.isna(df["Avg FDR"].iloc[1])

    def test_empty_players(self, teams):
        assert players_to_dataframe([], teams).empty

    def test_transfers_dataframe(
        self, optimization_service, standard_squad, make_player, no_fixtures
    ):
        star = make_player(100, position=Position.MID, total_points=100, now_cost=55)
        transfers = optimization_service.generate_transfer_suggestions(
            standard_squad, [star], 10, 1, no_fixtures
        )

        df = transfers_to_dataframe(transfers)

        assert list(df.columns) == ["Out", "In", "Pos", "Cost", "Gain", "Type", "Reasoning"]
        assert df["Cost"].iloc[0] == "+0.5m"
        assert df["Type"].iloc[0] == "upgrade"

    def test_chip_dataframe(self):
        strategy = ChipStrategy(
            current_event=18,
            phase=1,
            reset_round=19,
            suggestions=[
                ChipSuggestion(
                    chip=ChipKind.WILDCARD,
                    suggested_round=19,
                    justification="URGENT - use before GW19 reset! Must use before GW19 reset",
                    urgent=True,
                    phase=1,
                )
            ],
            expiring=[ChipKind.FREE_HIT],
        )

        df = chip_strategy_to_dataframe(strategy)

        assert list(df["Chip"]) == ["Wildcard", "Free Hit"]
        assert df["Gameweek"].iloc[0] == 19
        assert pd.isna(df["Gameweek"].iloc[1])
