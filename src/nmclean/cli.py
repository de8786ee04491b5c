"""CLI interface for nmclean."""

import json
import logging
import os
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from nmclean import __version__
from nmclean.config import ConfigError, Settings, load_settings
from nmclean.display import (
    confirm_action,
    console,
    err_console,
    show_delete_outcome,
    show_delete_preview,
    show_delete_summary,
    show_excluded_paths,
    show_scan_result,
    show_scanning_progress,
)
from nmclean.models import delete_envelope
from nmclean.remover import remove
from nmclean.scanner import resolve_root, scan

app = typer.Typer(
    name="nmclean",
    help="Find node_modules directories, see how much space they use, and delete them",
    add_completion=False,
)


def setup_logging(verbosity: int) -> None:
    """Send nmclean logs to stderr through Rich."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logger = logging.getLogger("nmclean")
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        logger.handlers.clear()

    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    handler.setLevel(level)
    logger.addHandler(handler)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"nmclean version {__version__}")
        raise typer.Exit()


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else Settings()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0, "--verbose", count=True, help="Increase verbosity (--verbose info, twice for debug)"
    ),
    config: Optional[str] = typer.Option(
        None, "--config", help="Path to a JSON config file"
    ),
) -> None:
    """nmclean - reclaim disk space from node_modules directories."""
    setup_logging(verbose)
    try:
        ctx.obj = load_settings(config)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command("scan")
def scan_command(
    ctx: typer.Context,
    root: str = typer.Argument(".", help="Directory to scan"),
    depth: Optional[int] = typer.Option(
        None, "--depth", "-d", min=0, help="Maximum depth below the root"
    ),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Find node_modules directories and report their size."""
    settings = _settings(ctx)
    root_path = resolve_root(root)

    if not root_path.exists():
        if as_json:
            typer.echo(json.dumps({"success": False, "error": f"Path does not exist: {root_path}"}))
        else:
            console.print(f"[red]Path does not exist: {root_path}[/red]")
        raise typer.Exit(1)

    max_depth = settings.max_depth if depth is None else depth

    if as_json:
        result = scan(
            root_path,
            max_depth,
            settings.excluded_paths(),
            target=settings.target_name,
            workers=settings.workers,
        )
        typer.echo(json.dumps(result.to_envelope(), indent=2))
        return

    with show_scanning_progress() as progress:
        task = progress.add_task(f"Scanning {root_path}...", total=None)

        def update_progress(path: str, size: int):
            progress.update(task, description=f"Found {path}")

        result = scan(
            root_path,
            max_depth,
            settings.excluded_paths(),
            target=settings.target_name,
            workers=settings.workers,
            progress_callback=update_progress,
        )

    show_scan_result(result)

    if result.findings:
        console.print()
        console.print("[dim]Run [bold]nmclean clean[/bold] to delete them[/dim]")


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    paths: list[str] = typer.Argument(..., help="Directories to delete"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate without deleting"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompts"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Delete the given directories."""
    settings = _settings(ctx)
    targets = [os.path.abspath(os.path.expanduser(p)) for p in paths]

    if not yes and not dry_run:
        # JSON output owns stdout
        out = err_console if as_json else console
        out.print(f"[bold]About to delete {len(targets)} path(s):[/bold]")
        for target in targets:
            out.print(f"  • {target}")
        if not confirm_action("Proceed with deletion?", prompt_console=out):
            out.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    outcomes = remove(targets, settings.excluded_paths(), dry_run=dry_run)

    if as_json:
        typer.echo(json.dumps(delete_envelope(outcomes), indent=2))
    else:
        for outcome in outcomes:
            show_delete_outcome(outcome)
        show_delete_summary(outcomes)

    if not all(o.success for o in outcomes):
        raise typer.Exit(1)


@app.command()
def clean(
    ctx: typer.Context,
    root: str = typer.Argument(".", help="Directory to scan"),
    depth: Optional[int] = typer.Option(
        None, "--depth", "-d", min=0, help="Maximum depth below the root"
    ),
    min_size: int = typer.Option(
        0, "--min-size", min=0, help="Only delete directories at least this many bytes"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate without deleting"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompts"),
) -> None:
    """Scan a directory and delete every node_modules found."""
    settings = _settings(ctx)
    root_path = resolve_root(root)

    if not root_path.exists():
        console.print(f"[red]Path does not exist: {root_path}[/red]")
        raise typer.Exit(1)

    excluded = settings.excluded_paths()
    max_depth = settings.max_depth if depth is None else depth

    with show_scanning_progress() as progress:
        progress.add_task(f"Scanning {root_path}...", total=None)
        result = scan(
            root_path,
            max_depth,
            excluded,
            target=settings.target_name,
            workers=settings.workers,
        )

    selected = [f for f in result.largest() if f.size >= min_size]
    if not selected:
        console.print("[yellow]Nothing to clean.[/yellow]")
        raise typer.Exit(0)

    show_delete_preview(selected, dry_run=dry_run)

    if not yes and not dry_run:
        console.print()
        if not confirm_action("Proceed with cleanup?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    console.print("\n[bold]Cleaning...[/bold]")
    outcomes = remove([f.path for f in selected], excluded, dry_run=dry_run)

    for outcome in outcomes:
        show_delete_outcome(outcome)
    show_delete_summary(outcomes)

    if not all(o.success for o in outcomes):
        raise typer.Exit(1)


@app.command()
def excluded(ctx: typer.Context) -> None:
    """List paths that are never scanned or deleted."""
    show_excluded_paths(_settings(ctx).excluded_paths())


if __name__ == "__main__":
    app()
