"""Shot chart CLI using Typer."""

import asyncio
import json
from datetime import date
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from typing_extensions import Annotated

from .errors import ConfigError, ShotChartError
from .models.bins import BinningConfig, CourtBounds
from .models.enums import ShotType
from .models.reference import Player, Team
from .models.shots import Shot, ShotFilters
from .models.stats import ShotStatsSummary

app = typer.Typer(help="NBA shot chart statistics, heatmaps and API server")
console = Console()


@app.callback()
def main_callback():
    """Configure logging before any command runs."""
    from .nba_logging import configure_logging

    configure_logging()


def build_service():
    """Service over the configured database."""
    from .db import get_session_factory
    from .services.shot_service import ShotService
    from .store.shot_store import ShotStore

    return ShotService(ShotStore(get_session_factory()))


def _filters(
    shot_types: Optional[List[str]],
    opponent: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
) -> ShotFilters:
    try:
        return ShotFilters(
            shot_types=[ShotType(t) for t in shot_types] if shot_types else None,
            opponent=opponent,
            date_range_start=date.fromisoformat(start_date) if start_date else None,
            date_range_end=date.fromisoformat(end_date) if end_date else None,
        )
    except ValueError as e:
        typer.echo(f"Error: invalid filter: {e}", err=True)
        raise typer.Exit(1)


ShotTypesOpt = Annotated[Optional[List[str]], typer.Option("--shot-type", help="2PT, 3PT or FT; repeatable")]
OpponentOpt = Annotated[Optional[str], typer.Option(help="Opponent team id")]
StartOpt = Annotated[Optional[str], typer.Option("--start-date", help="Start date (YYYY-MM-DD)")]
EndOpt = Annotated[Optional[str], typer.Option("--end-date", help="End date (YYYY-MM-DD)")]


@app.command()
def serve(
    host: Annotated[Optional[str], typer.Option(help="Bind host")] = None,
    port: Annotated[Optional[int], typer.Option(help="Bind port")] = None,
):
    """Run the HTTP API server."""
    import uvicorn

    from .api.app import create_app
    from .config import get_settings

    settings = get_settings()
    uvicorn.run(create_app(), host=host or settings.API_HOST, port=port or settings.API_PORT)


@app.command("init-db")
def init_db():
    """Create database tables."""
    from .db import close_engine, create_tables

    async def _run():
        try:
            await create_tables()
        finally:
            await close_engine()

    asyncio.run(_run())
    typer.echo("✅ Database tables created")


@app.command()
def load(
    path: Annotated[Path, typer.Argument(help="JSON file with players, teams and shots", exists=True)],
    season: Annotated[Optional[str], typer.Option(help="Season for shots without one")] = None,
):
    """Load players, teams and shots from a JSON document into the store."""
    try:
        document = json.loads(path.read_text())
        if not isinstance(document, dict):
            raise ValueError(f"expected a JSON object, got {type(document).__name__}")
        players = [Player.model_validate(p) for p in document.get("players", [])]
        teams = [Team.model_validate(t) for t in document.get("teams", [])]
        shots = [Shot.model_validate(s) for s in document.get("shots", [])]
    except ValueError as e:
        typer.echo(f"❌ Invalid shot document: {e}", err=True)
        raise typer.Exit(1)

    counts = asyncio.run(_run_load(players, teams, shots, season))
    typer.echo(f"📥 Loaded {counts[0]} players, {counts[1]} teams, {counts[2]} shots")


async def _run_load(players, teams, shots, season):
    from .db import close_engine, create_tables

    service = build_service()
    try:
        await create_tables()
        return (
            await service.store.upsert_players(players),
            await service.store.upsert_teams(teams),
            await service.store.add_shots(shots, season=season),
        )
    finally:
        await close_engine()


def _print_stats(summary: ShotStatsSummary) -> None:
    table = Table(title=f"{summary.player_name} - {summary.season}")
    table.add_column("Split")
    table.add_column("FGM", justify="right")
    table.add_column("FGA", justify="right")
    table.add_column("FG%", justify="right")

    rows = [("Overall", summary.total), ("2-Pointers", summary.two_pt), ("3-Pointers", summary.three_pt)]
    if summary.free_throws is not None:
        rows.append(("Free Throws", summary.free_throws))
    rows.extend((zone.name, zone) for zone in summary.zones)

    for label, split in rows:
        table.add_row(label, str(split.makes), str(split.attempts), f"{split.percentage * 100:.1f}%")
    console.print(table)


@app.command()
def stats(
    player_id: Annotated[str, typer.Argument(help="Player id")],
    season: Annotated[str, typer.Argument(help="Season, e.g. 2023-24")],
    shot_types: ShotTypesOpt = None,
    opponent: OpponentOpt = None,
    start_date: StartOpt = None,
    end_date: EndOpt = None,
):
    """Print shooting splits and zone breakdown for a player."""
    filters = _filters(shot_types, opponent, start_date, end_date)
    try:
        summary = asyncio.run(_run_stats(player_id, season, filters))
    except ShotChartError as e:
        typer.echo(f"❌ Failed to fetch shot statistics: {e}", err=True)
        raise typer.Exit(1)
    _print_stats(summary)


async def _run_stats(player_id: str, season: str, filters: ShotFilters) -> ShotStatsSummary:
    from .db import close_engine

    try:
        return await build_service().get_player_shot_stats(player_id, season, filters)
    finally:
        await close_engine()


@app.command()
def render(
    player_id: Annotated[str, typer.Argument(help="Player id")],
    season: Annotated[str, typer.Argument(help="Season, e.g. 2023-24")],
    output: Annotated[Path, typer.Argument(help="Output image path (.png, .svg, ...)")],
    heatmap: Annotated[bool, typer.Option("--heatmap", help="Render binned percentages")] = False,
    method: Annotated[str, typer.Option(help="hexbin or grid")] = "hexbin",
    cell_size: Annotated[str, typer.Option(help="small, medium or large")] = "medium",
    color_scale: Annotated[str, typer.Option(help="redYellowGreen or viridis")] = "redYellowGreen",
    min_shots: Annotated[int, typer.Option(help="Minimum shots per heatmap cell")] = 1,
    hide_makes: Annotated[bool, typer.Option("--hide-makes")] = False,
    hide_misses: Annotated[bool, typer.Option("--hide-misses")] = False,
    shot_types: ShotTypesOpt = None,
    opponent: OpponentOpt = None,
    start_date: StartOpt = None,
    end_date: EndOpt = None,
):
    """Render a shot chart or heatmap to an image file."""
    from .config import get_settings
    from .render import ChartState, render as render_scene, save_scene

    filters = _filters(shot_types, opponent, start_date, end_date)
    try:
        binning = BinningConfig(
            method=method, cell_size=cell_size, color_scale=color_scale, min_shots_in_bin=min_shots
        )
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    try:
        shots = asyncio.run(_run_fetch_shots(player_id, season, filters))
    except ShotChartError as e:
        typer.echo(f"❌ Failed to fetch shot data: {e}", err=True)
        raise typer.Exit(1)

    settings = get_settings()
    state = ChartState(
        shots=tuple(shots),
        show_makes=not hide_makes,
        show_misses=not hide_misses,
        heatmap=heatmap,
        binning=binning,
        bounds=CourtBounds(width=settings.CANVAS_WIDTH, height=settings.CANVAS_HEIGHT),
    )
    scene = render_scene(state)
    save_scene(scene, output)
    typer.echo(f"🏀 Rendered {len(shots)} shots to {output}")


async def _run_fetch_shots(player_id: str, season: str, filters: ShotFilters) -> List[Shot]:
    from .db import close_engine

    try:
        return await build_service().get_player_shots(player_id, season, filters)
    finally:
        await close_engine()


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    app()
