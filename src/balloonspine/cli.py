"""CLI entry point."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from balloonspine.core.config import Settings, get_settings
from balloonspine.core.context import AppContext
from balloonspine.core.exceptions import BalloonSpineError, ConfigurationError
from balloonspine.core.logging import configure_logging
from balloonspine.models.sighting import SightingRecord
from balloonspine.notifier.console import ConsoleNotifier
from balloonspine.surface.folium_map import FoliumMapSurface

app = typer.Typer(
    name="balloonspine",
    help="Record balloon canister sightings on a map",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Path | None = typer.Option(None, "--data-dir", help="Directory for the sightings snapshot"),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
) -> None:
    """Record balloon canister sightings on a map."""
    overrides: dict[str, object] = {}
    if data_dir is not None:
        overrides["storage_path"] = data_dir
    if log_level is not None:
        overrides["log_level"] = log_level
    try:
        settings = get_settings(**overrides)
    except ConfigurationError as e:
        err_console.print(f"[bold red]Invalid configuration:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=2) from e
    configure_logging(settings.log_level, console=err_console)
    ctx.obj = settings


def _context(settings: Settings) -> AppContext:
    return AppContext.from_settings(
        settings,
        notifier=ConsoleNotifier(console=console, error_console=err_console),
    )


def _export(context: AppContext, output: Path) -> None:
    if isinstance(context.surface, FoliumMapSurface):
        context.surface.save(output)


def _run(coro):
    try:
        return asyncio.run(coro)
    except BalloonSpineError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


@app.command()
def add(
    ctx: typer.Context,
    lat: float = typer.Option(..., "--lat", help="Latitude in degrees"),
    lng: float = typer.Option(..., "--lng", help="Longitude in degrees"),
    notes: str = typer.Option("", "--notes", "-n", help="Free-text notes"),
    image: Path | None = typer.Option(None, "--image", "-i", help="Photo to attach"),
) -> None:
    """Record a sighting and resolve its address."""
    settings: Settings = ctx.obj

    async def _add() -> SightingRecord | None:
        async with _context(settings) as context:
            context.tracker.select_location(lat, lng)
            if image is not None:
                context.tracker.attach_image(image)
            record = await context.tracker.submit(notes=notes)
            await context.tracker.wait_for_enrichment()
            _export(context, settings.map_output)
            return context.store.get(record.id) if record else None

    record = _run(_add())
    if record is not None:
        console.print(f"[green]Sighting {record.id}[/green] at {record.lat}, {record.lng}: {escape(record.address)}")


@app.command("list")
def list_sightings(ctx: typer.Context) -> None:
    """List recorded sightings."""
    settings: Settings = ctx.obj

    async def _list() -> list[SightingRecord]:
        async with _context(settings) as context:
            return context.store.list()

    records = _run(_list())
    table = Table(title=f"Sightings ({len(records)})")
    table.add_column("ID", justify="right")
    table.add_column("Recorded")
    table.add_column("Lat", justify="right")
    table.add_column("Lng", justify="right")
    table.add_column("Address")
    table.add_column("Notes")
    table.add_column("Photo")
    for r in records:
        table.add_row(
            str(r.id),
            r.created_at.astimezone().strftime("%Y-%m-%d %H:%M"),
            f"{r.lat:.5f}",
            f"{r.lng:.5f}",
            escape(r.address),
            escape(r.notes),
            "yes" if r.image else "",
        )
    console.print(table)


@app.command()
def delete(
    ctx: typer.Context,
    sighting_id: int = typer.Argument(..., help="ID of the sighting to delete"),
) -> None:
    """Delete a sighting."""
    settings: Settings = ctx.obj

    async def _delete() -> bool:
        async with _context(settings) as context:
            existed = await context.tracker.delete(sighting_id)
            _export(context, settings.map_output)
            return existed

    if not _run(_delete()):
        err_console.print(f"No sighting with id {sighting_id}")
        raise typer.Exit(code=1)
    console.print(f"Deleted sighting {sighting_id}")


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show sighting counts."""
    settings: Settings = ctx.obj

    async def _stats():
        async with _context(settings) as context:
            return context.tracker.stats()

    result = _run(_stats())
    console.print(f"[bold]Sightings:[/bold] {result.total}")
    console.print(f"  resolved {result.resolved}, pending {result.pending}, unknown {result.failed}")


@app.command("export-map")
def export_map(
    ctx: typer.Context,
    output: Path | None = typer.Option(None, "--output", "-o", help="HTML file to write"),
) -> None:
    """Write the sighting map as an HTML page."""
    settings: Settings = ctx.obj
    target = output or settings.map_output

    async def _export_map() -> None:
        async with _context(settings) as context:
            _export(context, target)

    _run(_export_map())
    console.print(f"Map written to {target}")


@app.command()
def version() -> None:
    """Show version."""
    from balloonspine import __version__

    console.print(f"balloonspine {__version__}")


if __name__ == "__main__":
    app()
