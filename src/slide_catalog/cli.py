"""CLI interface for slide-catalog."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config.logging import get_logger, setup_logging
from .config.settings import Settings, get_settings
from .studio.services import BrandAssetService, DeckService, TemplateService
from .studio.state import CatalogState

app = typer.Typer(
    name="slide-catalog",
    help="Inspect decks, brand assets and templates in a slide workspace.",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = Console()
logger = get_logger(__name__)

STATUS_STYLES = {
    "built": "green",
    "partial": "yellow",
    "planned": "dim",
    "error": "red",
}


def _state(ctx: typer.Context) -> CatalogState:
    return ctx.obj


def _unwrap(response: dict) -> dict:
    """Exit with the error message when a service call failed."""
    if not response["success"]:
        console.print(f"[red]Error:[/red] {response['error']}")
        raise typer.Exit(1)
    return response["data"] or {}


def _print_json(data) -> None:
    console.print_json(json.dumps(data, default=str))


@app.callback()
def _configure(
    ctx: typer.Context,
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Workspace root (default: SLIDE_CATALOG_WORKSPACE_ROOT or current directory)",
        file_okay=False,
    ),
    log_level: str = typer.Option(None, "--log-level", help="Override the configured log level"),
) -> None:
    """Resolve settings once and share the workspace state with every command."""
    settings = get_settings()
    if workspace is not None:
        settings = Settings(workspace_root=workspace)
    setup_logging(level=log_level or settings.log_level)
    logger.debug("Workspace root: %s", settings.workspace_root)
    ctx.obj = CatalogState(settings=settings)


@app.command()
def scan(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List decks and folders with their build status."""
    data = _unwrap(asyncio.run(DeckService(_state(ctx)).scan()))
    if as_json:
        _print_json(data)
        return

    decks, folders = data["decks"], data["folders"]
    if not decks and not folders:
        console.print("[dim]No decks found.[/dim]")
        return

    table = Table(title="Decks", show_header=True, header_style="bold")
    table.add_column("Deck", style="cyan")
    table.add_column("Name")
    table.add_column("Folder", style="dim")
    table.add_column("Slides", justify="right")
    table.add_column("Status")
    for deck in decks:
        style = STATUS_STYLES.get(deck["status"], "white")
        table.add_row(
            deck["id"],
            deck["name"],
            deck["folder_id"] or "",
            f"{deck['built_slide_count']}/{deck['slide_count']}",
            f"[{style}]{deck['status']}[/{style}]",
        )
    console.print(table)
    if folders:
        summary = ", ".join(f"{f['name']} ({f['deck_count']})" for f in folders)
        console.print(f"\n[bold]Folders:[/bold] {summary}")


@app.command()
def deck(
    ctx: typer.Context,
    deck_id: str = typer.Argument(..., help="Deck directory name"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Show per-slide build status for one deck."""
    data = _unwrap(asyncio.run(DeckService(_state(ctx)).get_deck_detail(deck_id)))
    if as_json:
        _print_json(data)
        return

    style = STATUS_STYLES.get(data["status"], "white")
    console.print(
        Panel(
            f"[bold]Path:[/bold] {data['path']}\n"
            f"[bold]Audience:[/bold] {data['audience'] or '-'}\n"
            f"[bold]Status:[/bold] [{style}]{data['status']}[/{style}] "
            f"({data['built_slide_count']}/{data['slide_count']} built)",
            title=data["name"],
            border_style="cyan",
        )
    )
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Intent")
    table.add_column("Template", style="dim")
    table.add_column("Status")
    for slide in data["slides"]:
        s_style = STATUS_STYLES.get(slide["status"], "white")
        table.add_row(
            str(slide["number"]),
            slide["intent"] or "",
            slide["template"] or "",
            f"[{s_style}]{slide['status']}[/{s_style}]",
        )
    console.print(table)


@app.command()
def assets(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List brand assets with their color metadata."""
    data = _unwrap(BrandAssetService(_state(ctx)).get_assets())
    if as_json:
        _print_json(data)
        return
    if not data["assets"]:
        console.print("[dim]No brand assets found.[/dim]")
        return

    table = Table(title="Brand Assets", show_header=True, header_style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Type")
    table.add_column("Name", style="cyan")
    table.add_column("File")
    table.add_column("Affinity")
    table.add_column("Colors")
    for asset in data["assets"]:
        color = asset["color_metadata"]
        affinity = "[dim]not analyzed[/dim]"
        swatches = ""
        if color:
            affinity = color["background_affinity"]
            if color["manual_override"]:
                affinity += " [yellow](manual)[/yellow]"
            swatches = " ".join(f"[{c}]■[/]" for c in color["dominant_colors"])
        table.add_row(
            asset["id"], asset["type"], asset["name"], asset["relative_path"], affinity, swatches
        )
    console.print(table)


@app.command()
def analyze(
    ctx: typer.Context,
    asset_id: str = typer.Argument(None, help="Asset id to (re)analyze"),
    all_pending: bool = typer.Option(
        False, "--all", help="Analyze every asset without color metadata"
    ),
    force: bool = typer.Option(
        False, "--force", help="Replace manually edited color metadata"
    ),
) -> None:
    """Run color analysis on one asset, or on all assets missing metadata."""
    service = BrandAssetService(_state(ctx))
    if asset_id and all_pending:
        console.print("[red]Error:[/red] Pass either an asset id or --all, not both")
        raise typer.Exit(2)
    if asset_id:
        data = _unwrap(asyncio.run(service.analyze_asset(asset_id, force)))
        color = data["color_metadata"]
        console.print(
            f"[green]✓[/green] {asset_id}: affinity={color['background_affinity']}, "
            f"contrast={color['contrast_needs']}, colors={', '.join(color['dominant_colors'])}"
        )
        return
    if not all_pending:
        console.print("[red]Error:[/red] Pass an asset id or --all")
        raise typer.Exit(2)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
    ) as progress:
        task = progress.add_task("Analyzing brand assets", total=None)

        async def on_progress(current: int, total: int) -> None:
            progress.update(task, total=total, completed=current - 1)

        data = _unwrap(asyncio.run(service.batch_analyze(on_progress)))
        progress.update(task, completed=len(data["results"]))

    results = data["results"]
    failed = [r for r in results if not r["success"]]
    console.print(f"Analyzed {len(results) - len(failed)} of {len(results)} assets")
    for r in failed:
        console.print(f"  [red]✗[/red] {r['asset_id']}: {r['error']}")
    if failed:
        raise typer.Exit(1)


@app.command()
def score(
    ctx: typer.Context,
    deck_id: str = typer.Argument(..., help="Deck directory name"),
    top: int = typer.Option(3, "--top", "-n", min=1, help="Templates to show per slide"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Rank slide templates for every slide of a deck."""
    data = _unwrap(asyncio.run(TemplateService(_state(ctx)).score_deck(deck_id)))
    if as_json:
        _print_json(data)
        return

    table = Table(title=f"Template matches for {deck_id}", show_header=True, header_style="bold")
    table.add_column("Slide", justify="right")
    table.add_column("Template", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Tier")
    tier_styles = {"high": "green", "medium": "yellow", "low": "dim"}
    for number, scores in data["scores"].items():
        for i, s in enumerate(scores[:top]):
            style = tier_styles[s["tier"]]
            table.add_row(
                str(number) if i == 0 else "",
                s["template_name"],
                str(s["score"]),
                f"[{style}]{s['tier']}[/{style}]",
            )
    console.print(table)


@app.command()
def status(ctx: typer.Context) -> None:
    """Show resolved workspace settings."""
    settings = _state(ctx).settings
    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Workspace", str(settings.workspace_root))
    table.add_row("Output Directory", str(settings.output_dir))
    table.add_row("Catalog Directory", str(settings.catalog_root))
    table.add_row("Brand Assets", str(settings.brand_assets_dir))
    table.add_row("Log Level", settings.log_level)
    console.print(Panel(table, title="[bold]Configuration[/bold]", border_style="blue"))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
