"""Rich terminal display for nmclean."""

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from nmclean.exclusions import ExcludedPaths
from nmclean.formatting import format_bytes
from nmclean.models import DeleteOutcome, Finding, ScanResult

console = Console()
err_console = Console(stderr=True)


def show_findings(findings: list[Finding], title: str = "node_modules Directories") -> None:
    """Display findings as a table."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Project")
    table.add_column("Size", justify="right")
    table.add_column("Path", style="dim")

    for i, finding in enumerate(findings, 1):
        table.add_row(
            str(i),
            finding.parent_project,
            finding.size_formatted,
            finding.path,
        )

    console.print(table)


def show_scan_result(result: ScanResult) -> None:
    """Display full scan results."""
    if not result.findings:
        console.print(f"[yellow]No node_modules directories found under {result.scanned_root}[/yellow]")
        return

    show_findings(list(result.findings))
    console.print()
    console.print(
        Panel(
            f"[bold]Found:[/bold] {result.count}\n"
            f"[bold]Total size:[/bold] {result.total_size_formatted}\n"
            f"[bold]Scanned:[/bold] {result.scanned_root}",
            title="Summary",
            border_style="blue",
        )
    )


def show_delete_preview(findings: list[Finding], dry_run: bool = False) -> None:
    """Display what is about to be deleted."""
    if dry_run:
        console.print("[yellow]DRY RUN - No files will be deleted[/yellow]\n")

    show_findings(findings, title="Delete Preview")
    total = sum(f.size for f in findings)
    console.print(f"\n[bold]Total to delete: {format_bytes(total)}[/bold]")


def show_delete_outcome(outcome: DeleteOutcome) -> None:
    """Display the result of a single deletion."""
    if outcome.success:
        freed = f" ({format_bytes(outcome.bytes_freed)})" if outcome.bytes_freed else ""
        console.print(f"  [green]✓[/green] {outcome.path}: {outcome.message}{freed}")
    else:
        console.print(f"  [red]✗[/red] {outcome.path}: {outcome.message}")


def show_delete_summary(outcomes: list[DeleteOutcome]) -> None:
    """Display deletion summary."""
    freed = sum(o.bytes_freed for o in outcomes if o.success)
    success_count = sum(1 for o in outcomes if o.success)
    failure_count = len(outcomes) - success_count
    dry_run = any(o.dry_run for o in outcomes)

    console.print()
    if dry_run:
        console.print("[bold yellow]Dry Run Complete[/bold yellow]")
    else:
        console.print("[bold green]Cleanup Complete![/bold green]")
    console.print()

    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Would free" if dry_run else "Space freed", format_bytes(freed))
    table.add_row("Directories", str(success_count))
    if failure_count > 0:
        table.add_row("[red]Failed[/red]", str(failure_count))

    console.print(table)


def show_excluded_paths(excluded: ExcludedPaths) -> None:
    """List protected paths."""
    console.print("[bold]Excluded Paths[/bold]\n")
    for entry in excluded:
        console.print(f"  • {entry}")


def show_scanning_progress() -> Progress:
    """Create a spinner for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def confirm_action(message: str, prompt_console: Console | None = None) -> bool:
    """Ask for confirmation, prompting on ``prompt_console`` (stdout by default)."""
    from rich.prompt import Confirm

    return Confirm.ask(message, console=prompt_console or console)
