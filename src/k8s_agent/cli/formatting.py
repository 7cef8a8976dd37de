"""Rich formatting helpers for the k8s-agent CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
HTML output is written with ``soft_wrap`` and without markup so it
reaches stdout byte-for-byte.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from k8s_agent.refinement.events import RefinementEvent


def get_console(stderr: bool = False) -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=stderr)


def print_html(html: str, console: Console) -> None:
    """Write HTML verbatim."""
    console.print(html, markup=False, highlight=False, emoji=False, soft_wrap=True)


def format_events(events: list[RefinementEvent], console: Console) -> None:
    """Display refinement events as a table."""
    if not events:
        console.print("[dim]No events.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Iter", justify="right", style="cyan", width=4)
    table.add_column("Stage", style="dim")
    table.add_column("Event")
    table.add_column("Attempt", justify="right")
    table.add_column("Detail")

    for event in events:
        style = "red" if event.is_failure else "green"
        attempt = f"{event.attempt}/{event.max_attempts}" if event.attempt else ""
        table.add_row(
            str(event.iteration) if event.iteration else "",
            event.stage,
            f"[{style}]{event.kind}[/{style}]",
            attempt,
            escape(event.message),
        )

    console.print(table)


def format_violations(violations: list[str], console: Console) -> None:
    """Display structural validation results."""
    if not violations:
        console.print("[green]valid[/green]")
        return
    console.print("[red]invalid[/red]")
    for violation in violations:
        console.print(f"  - {escape(violation)}")


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
