"""
Display utilities for the presentation layer.

Helper functions that turn domain results into pandas DataFrames for the
terminal report.
"""

from typing import Dict, Iterable, List, Optional

import pandas as pd

from fpl_squad_advisor.domain.models.chip import ChipStrategy
from fpl_squad_advisor.domain.models.scoring import RankedPlayer
from fpl_squad_advisor.domain.models.selection import CaptainSelection, TeamSelection
from fpl_squad_advisor.domain.models.team import TeamDomain
from fpl_squad_advisor.domain.models.transfer import Transfer
from fpl_squad_advisor.domain.services.fixture_analysis_service import (
    FixtureAnalysisService,
)
from fpl_squad_advisor.utils.helpers import format_price


class DataContractError(Exception):
    """Raised when interface data contracts are violated."""

    pass


def resolve_team_names(
    players_df: pd.DataFrame,
    teams: Iterable[TeamDomain],
    team_col: str = "team_id",
    context: str = "team name resolution",
) -> pd.DataFrame:
    """
    Map club IDs in a DataFrame to short names in a 'Team' column.

    Args:
        players_df: DataFrame with a club ID column
        teams: All clubs
        team_col: Name of the club ID column
        context: Context for error messages

    Returns:
        Copy of the DataFrame with a 'Team' column

    Raises:
        DataContractError: If the column is missing or a club is unknown
    """
    if team_col not in players_df.columns:
        raise DataContractError(
            f"No team column found in {context}. Available: {list(players_df.columns)[:10]}"
        )

    team_mapping = {team.team_id: team.short_name for team in teams}
    result_df = players_df.copy()
    result_df["Team"] = result_df[team_col].map(team_mapping)

    unmapped = result_df["Team"].isna().sum()
    if unmapped > 0:
        missing_team_ids = result_df[result_df["Team"].isna()][team_col].unique()
        raise DataContractError(
            f"Team mapping failed in {context}: {unmapped} players unmapped. "
            f"Missing team IDs: {list(missing_team_ids)}"
        )
    return result_df


def _next_fixture_text(player: RankedPlayer) -> str:
    fixture = player.next_fixture
    if fixture is None:
        return "-"
    return f"{fixture.opponent} ({'H' if fixture.is_home else 'A'}) {fixture.difficulty}"


def _player_row(player: RankedPlayer) -> Dict:
    return {
        "player_id": player.player_id,
        "team_id": player.team_id,
        "Player": player.web_name,
        "Pos": player.position.value,
        "Price": format_price(player.player.now_cost),
        "Form": player.player.form_value,
        "Base": round(player.base_score, 1),
        "Final": round(player.final_score, 1),
        "Rank": player.rank,
        "Penalty": player.penalty_applied.value,
        "Next": _next_fixture_text(player),
    }


def players_to_dataframe(
    players: List[RankedPlayer], teams: Iterable[TeamDomain]
) -> pd.DataFrame:
    """Tabulate ranked players with club names and their fixture run, in order."""
    columns = [
        "Player", "Pos", "Team", "Price", "Form", "Final", "Rank", "Penalty", "Run", "Avg FDR"
    ]
    if not players:
        return pd.DataFrame(columns=columns)
    rows = []
    for player in players:
        row = _player_row(player)
        row["Run"] = FixtureAnalysisService.format_fixture_run(player.fixtures)
        average = FixtureAnalysisService.average_difficulty(player.fixtures)
        row["Avg FDR"] = None if average is None else round(average, 1)
        rows.append(row)
    df = pd.DataFrame(rows)
    return resolve_team_names(df, teams)[columns].reset_index(drop=True)


def selection_to_dataframe(
    selection: TeamSelection,
    teams: Iterable[TeamDomain],
    captaincy: Optional[CaptainSelection] = None,
    recent_points: Optional[Dict[int, int]] = None,
) -> pd.DataFrame:
    """
    Tabulate a lineup: starters first, then the bench in order.

    Args:
        selection: Lineup to show
        teams: All clubs
        captaincy: Adds a (C)/(V) marker when given
        recent_points: Adds a 'Last 3' column when given

    Returns:
        DataFrame with one row per squad player
    """
    teams = list(teams)
    rows = []
    for role, players in (("Start", selection.starting), ("Bench", selection.bench)):
        for player in players:
            row = _player_row(player)
            row["Role"] = role
            if captaincy is not None:
                if player.player_id == captaincy.captain.player_id:
                    row["Player"] += " (C)"
                elif player.player_id == captaincy.vice_captain.player_id:
                    row["Player"] += " (V)"
            if recent_points is not None:
                row["Last 3"] = recent_points.get(player.player_id)
            rows.append(row)

    df = resolve_team_names(pd.DataFrame(rows), teams)
    columns = ["Role", "Player", "Pos", "Team", "Price", "Form", "Final", "Rank", "Next"]
    if recent_points is not None:
        columns.append("Last 3")
    return df[columns].reset_index(drop=True)


def transfers_to_dataframe(transfers: List[Transfer]) -> pd.DataFrame:
    """Tabulate recommended transfers in the order they were found."""
    columns = ["Out", "In", "Pos", "Cost", "Gain", "Type", "Reasoning"]
    if not transfers:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(
        [
            {
                "Out": t.player_out.web_name,
                "In": t.player_in.web_name,
                "Pos": t.position,
                "Cost": f"{t.price_diff:+.1f}m",
                "Gain": round(t.score_improvement, 1),
                "Type": t.kind.value.replace("_", " "),
                "Reasoning": t.reasoning,
            }
            for t in transfers
        ],
        columns=columns,
    )


def chip_strategy_to_dataframe(strategy: ChipStrategy) -> pd.DataFrame:
    """Tabulate chip suggestions by gameweek, expiring chips last."""
    columns = ["Chip", "Gameweek", "Urgent", "Why"]
    rows = [
        {
            "Chip": s.chip.display_name,
            "Gameweek": s.suggested_round,
            "Urgent": s.urgent,
            "Why": s.justification,
        }
        for s in strategy.suggestions
    ]
    rows.extend(
        {
            "Chip": chip.display_name,
            "Gameweek": None,
            "Urgent": True,
            "Why": "No free gameweek left before the chips reset",
        }
        for chip in strategy.expiring
    )
    return pd.DataFrame(rows, columns=columns)
