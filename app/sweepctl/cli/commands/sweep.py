"""One-off sweep command.

This module provides `sweepctl sweep`, which runs a single sweep with the
current settings outside of the scheduler loop.
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from sweepctl.cli.context import get_notifier, get_vault, open_store
from sweepctl.core.scheduler import CleanupScheduler
from sweepctl.core.state import StateManager
from sweepctl.models.history import HistoryActionType
from sweepctl.sweep.sweeper import MS_PER_MINUTE, current_millis, find_expired
from sweepctl.utils.formatting import console, print_error, print_info, print_success
from sweepctl.vault.models import VaultEntry

app = typer.Typer(
    name="sweep",
    help="Run a single sweep now.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def sweep_now(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be trashed."),
    ] = False,
) -> None:
    """Trash expired notes from the target folder once.

    The same safety gates as the scheduler apply: nothing is deleted while
    the check interval is 0 or automatic deletion is not confirmed.

    Examples:
        sweepctl sweep --dry-run
        sweepctl --vault ~/notes sweep
    """
    if ctx.invoked_subcommand is not None:
        return

    store = open_store(ctx)
    vault = get_vault(ctx)
    settings = store.settings

    if dry_run:
        now = current_millis()
        _print_plan(find_expired(settings, vault, now=now), settings.target_folder, now)
        if not settings.is_armed:
            print_info("Note: a real sweep would delete nothing with the current settings.")
        return

    if not settings.is_enabled:
        print_info("Sweeping is stopped (check interval is 0). Nothing was deleted.")
        return

    notifier = get_notifier(ctx)
    scheduler = CleanupScheduler(store, vault, notifier, state=StateManager())
    try:
        deleted = scheduler.run_sweep(HistoryActionType.MANUAL_SWEEP)
    except OSError as e:
        print_error(f"Sweep aborted: {e}")
        raise typer.Exit(code=1) from e

    if not deleted and settings.confirmed:
        print_success(f"No expired notes in '{settings.target_folder}'.")


def _print_plan(entries: list[VaultEntry], folder: str, now: int) -> None:
    """Display the files a sweep would trash."""
    if not entries:
        print_success(f"No expired notes in '{folder}'.")
        return

    table = Table(
        title="Would Trash (dry-run)",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="path", min_width=30)
    table.add_column("Age", style="dim", justify="right")

    for entry in entries:
        age_minutes = (now - entry.ctime_ms) // MS_PER_MINUTE
        table.add_row(escape(entry.path), f"{age_minutes} min")

    console.print(table)
    print_info(f"Dry-run: {len(entries)} note(s) would be trashed.")
