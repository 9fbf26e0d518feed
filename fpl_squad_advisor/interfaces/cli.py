"""FPL Squad Advisor command line interface.

Usage:
    # Lineup, transfers and captaincy for a manager
    fpl-squad-advisor recommend 1234567

    # Force two transfers and plan with the bench boost active
    fpl-squad-advisor recommend 1234567 --transfers 2 --bench-boost

    # Chip timing plan
    fpl-squad-advisor chips 1234567
"""

import sys
from typing import Optional, Tuple

import pandas as pd
import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from fpl_squad_advisor.adapters.fpl_api_repositories import FPLApiRepository
from fpl_squad_advisor.domain.common.result import DomainError, SquadCompositionError
from fpl_squad_advisor.domain.services.chip_assessment_service import (
    ChipAssessmentService,
)
from fpl_squad_advisor.domain.services.data_orchestration_service import (
    DataOrchestrationService,
    GameweekSnapshot,
)
from fpl_squad_advisor.domain.services.recommendation_service import (
    RecommendationService,
)
from fpl_squad_advisor.interfaces.display_utils import (
    chip_strategy_to_dataframe,
    players_to_dataframe,
    selection_to_dataframe,
    transfers_to_dataframe,
)
from fpl_squad_advisor.utils.helpers import format_price

app = typer.Typer(help="FPL Squad Advisor - lineup, transfer, captaincy and chip advice")
console = Console()


def _configure_logging(debug: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug else "WARNING")


def _print_dataframe(df: pd.DataFrame, title: str) -> None:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for column in df.columns:
        table.add_column(str(column))
    for row in df.itertuples(index=False):
        table.add_row(*("" if pd.isna(value) else str(value) for value in row))
    console.print(table)


def _report_failure(error: DomainError) -> None:
    console.print(f"[red]❌ {error.message}[/red]")
    if error.source:
        console.print(f"[red]   Failed fetch: {error.source}[/red]")
    if error.is_retryable:
        console.print("[yellow]   This looks temporary, try again shortly.[/yellow]")


def _load(
    manager_id: int, free_transfers: Optional[int]
) -> Tuple[GameweekSnapshot, DataOrchestrationService]:
    repository = FPLApiRepository()
    data_service = DataOrchestrationService(
        player_repository=repository,
        team_repository=repository,
        fixture_repository=repository,
        manager_repository=repository,
    )
    console.print("[yellow]📊 Loading FPL data...[/yellow]")
    result = data_service.load_snapshot(manager_id, free_transfers=free_transfers)
    if result.is_failure:
        _report_failure(result.error)
        raise typer.Exit(1)
    return result.value, data_service


@app.command()
def recommend(
    manager_id: int = typer.Argument(..., help="FPL entry (manager) ID"),
    free_transfers: Optional[int] = typer.Option(
        None,
        "--free-transfers",
        "-ft",
        help="Override the free transfers replayed from history",
    ),
    transfers: Optional[int] = typer.Option(
        None, "--transfers", "-t", help="Number of transfers to search for"
    ),
    bench_boost: bool = typer.Option(
        False, "--bench-boost", "-bb", help="Plan with every squad player starting"
    ),
    target_gw: Optional[int] = typer.Option(
        None, "--target-gw", "-g", help="Ignore fixtures before this gameweek"
    ),
    window: int = typer.Option(5, "--window", "-w", help="Fixtures looked ahead"),
    recent: bool = typer.Option(
        True, "--recent/--no-recent", help="Fetch last-3-gameweek points"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """Recommend a lineup, transfers and captaincy for a manager."""
    _configure_logging(debug)

    if target_gw is not None and not (1 <= target_gw <= 38):
        console.print(f"[red]Error: target gameweek must be 1-38, got {target_gw}[/red]")
        raise typer.Exit(1)

    snapshot, data_service = _load(manager_id, free_transfers)
    squad = snapshot.squad

    recent_points = None
    if recent:
        recent_points = data_service.load_recent_points(squad.player_ids)

    try:
        recommendation = RecommendationService().generate_recommendations(
            squad,
            snapshot.players,
            snapshot.teams,
            snapshot.fixtures,
            fixture_window=window,
            target_round=target_gw,
            user_override_count=transfers,
            use_bench_boost=bench_boost,
            recent_points=recent_points,
        )
    except SquadCompositionError as e:
        console.print(f"[red]❌ Invalid squad: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"\n[bold cyan]⚽ GW{snapshot.current_event} advice for manager {manager_id}[/bold cyan]"
    )
    console.print(
        f"[cyan]Bank: {format_price(recommendation.bank)} | "
        f"Free transfers: {recommendation.free_transfers}[/cyan]\n"
    )

    if recommendation.transfers:
        _print_dataframe(
            transfers_to_dataframe(recommendation.transfers), "🔄 Suggested transfers"
        )
    else:
        console.print("[green]🔒 No transfers recommended, hold this week.[/green]")

    selection = recommendation.selection
    _print_dataframe(
        selection_to_dataframe(
            selection,
            snapshot.teams,
            captaincy=recommendation.captaincy,
            recent_points=recommendation.recent_points,
        ),
        f"📋 Lineup ({selection.formation_label}, score {selection.formation_score:.0f})",
    )
    console.print(f"[bold]🎯 {recommendation.captaincy.reasoning}[/bold]\n")

    if recommendation.weak_players:
        _print_dataframe(
            players_to_dataframe(recommendation.weak_players, snapshot.teams),
            "⚠️ Weak starters",
        )


@app.command()
def chips(
    manager_id: int = typer.Argument(..., help="FPL entry (manager) ID"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """Suggest gameweeks for every chip still available."""
    _configure_logging(debug)

    repository = FPLApiRepository()
    squad_result = repository.get_squad_snapshot(manager_id, free_transfers=1)
    if squad_result.is_failure:
        _report_failure(squad_result.error)
        raise typer.Exit(1)
    history_result = repository.get_chip_history(manager_id)
    if history_result.is_failure:
        _report_failure(history_result.error)
        raise typer.Exit(1)

    current_event = squad_result.value.current_event
    strategy = ChipAssessmentService().generate_chip_strategy(
        history_result.value, current_event
    )

    console.print(
        f"\n[bold cyan]🃏 Chip plan from GW{current_event} "
        f"(phase {strategy.phase}, chips reset after GW{strategy.reset_round})[/bold cyan]"
    )
    if strategy.suggestions or strategy.expiring:
        _print_dataframe(chip_strategy_to_dataframe(strategy), "Chip timing")
    else:
        console.print("[green]All chips for this half of the season are used.[/green]")


if __name__ == "__main__":
    app()
