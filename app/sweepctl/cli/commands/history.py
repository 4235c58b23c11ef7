"""History command for viewing past sweeps.

This module provides the `sweepctl history` command for viewing the
files trashed by earlier sweeps.
"""

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from sweepctl.core.state import StateManager
from sweepctl.models.history import HistoryEntry
from sweepctl.utils.formatting import console, print_info

app = typer.Typer(
    name="history",
    help="View history of sweeps.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum number of entries to show."),
    ] = 20,
    since: Annotated[
        str | None,
        typer.Option("--since", help="Show entries since date (YYYY-MM-DD)."),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show sweeps that trashed files.

    Examples:
        sweepctl history              # Show last 20 entries
        sweepctl history -n 50        # Show last 50 entries
        sweepctl history --since 2026-01-01
        sweepctl history --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    entries = StateManager().get_history(limit=limit)

    if since:
        try:
            since_parsed = datetime.fromisoformat(since)
        except ValueError:
            typer.echo(f"Invalid date format: {since}. Use YYYY-MM-DD.", err=True)
            raise typer.Exit(code=1) from None

        if since_parsed.tzinfo is None:
            # Naive dates compare against the UTC calendar day
            since_date = since_parsed.strftime("%Y-%m-%d")
            entries = [e for e in entries if e.timestamp[:10] >= since_date]
        else:
            entries = [e for e in entries if datetime.fromisoformat(e.timestamp) >= since_parsed]

    if not entries:
        print_info("No history entries found.")
        return

    if json_output:
        console.print_json(json.dumps([entry.to_dict() for entry in entries]))
    else:
        _print_table(entries)


def _print_table(entries: list[HistoryEntry]) -> None:
    """Print history as a Rich table."""
    table = Table(title="Sweep History")
    table.add_column("ID", style="dim")
    table.add_column("Timestamp", style="info")
    table.add_column("Trigger", style="success")
    table.add_column("Files", style="path")

    for entry in entries:
        count = len(entry.paths)
        names = ", ".join(entry.paths[:3])
        if count > 3:
            names += f" (+{count - 3} more)"

        table.add_row(
            entry.id[:8],
            _format_timestamp(entry.timestamp),
            entry.action_type.value.replace("_", " "),
            escape(names),
        )

    console.print(table)


def _format_timestamp(iso_timestamp: str) -> str:
    """Format an ISO timestamp as YYYY-MM-DD HH:MM."""
    dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    return dt.strftime("%Y-%m-%d %H:%M")
