"""Settings commands.

Show and change the sweeper settings. Every change is validated and
persisted immediately; a running `sweepctl run` picks it up on its next
poll and restarts its schedule when the check interval changed.
"""

import json
from typing import Annotated, Any

import typer
from rich.markup import escape
from rich.table import Table

from sweepctl.cli.context import open_store
from sweepctl.core.settings import (
    CHECK_INTERVAL_MAX,
    CHECK_INTERVAL_MIN,
    TTL_MINUTES_MAX,
    TTL_MINUTES_MIN,
    Settings,
    SettingsError,
)
from sweepctl.core.store import SettingsStore
from sweepctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and change sweeper settings.",
    no_args_is_help=True,
)


@app.command()
def show(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show the current settings."""
    store = open_store(ctx)

    if json_output:
        console.print_json(json.dumps(store.settings.model_dump()))
        return

    _print_settings(store.settings)
    console.print(f"\n[dim]Settings file: {store.path}[/dim]", highlight=False)


@app.command("set")
def set_(
    ctx: typer.Context,
    folder: Annotated[
        str | None,
        typer.Option("--folder", "-f", help="Vault-relative folder to sweep."),
    ] = None,
    ttl: Annotated[
        int | None,
        typer.Option(
            "--ttl",
            "-t",
            help=f"Minutes after creation before a note expires ({TTL_MINUTES_MIN}-{TTL_MINUTES_MAX}).",
        ),
    ] = None,
    interval: Annotated[
        int | None,
        typer.Option(
            "--interval",
            "-i",
            help=(
                f"Minutes between sweeps ({CHECK_INTERVAL_MIN}-{CHECK_INTERVAL_MAX}), 0 stops sweeping."
            ),
        ),
    ] = None,
) -> None:
    """Change the target folder, lifetime or check interval."""
    changes: dict[str, Any] = {}
    if folder is not None:
        changes["target_folder"] = folder
    if ttl is not None:
        changes["ttl_minutes"] = ttl
    if interval is not None:
        changes["check_interval"] = interval

    if not changes:
        print_error("Nothing to change. Pass --folder, --ttl or --interval.")
        raise typer.Exit(code=1)

    store = open_store(ctx)
    _apply(store, changes)
    print_success("Settings saved.")


@app.command()
def confirm(
    ctx: typer.Context,
    revoke: Annotated[
        bool,
        typer.Option("--revoke", help="Withdraw the confirmation."),
    ] = False,
) -> None:
    """Confirm that sweepctl may delete files automatically."""
    store = open_store(ctx)
    enabled = not revoke

    if store.settings.confirmed == enabled:
        state = "enabled" if enabled else "disabled"
        print_info(f"Automatic deletion is already {state}.")
        return

    _apply(store, {"confirmed": enabled})


@app.command()
def reset(ctx: typer.Context) -> None:
    """Restore the default settings."""
    store = open_store(ctx)
    try:
        store.reset()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


# === Private helper functions ===


def _apply(store: SettingsStore, changes: dict[str, Any]) -> None:
    try:
        store.update(**changes)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _print_settings(settings: Settings) -> None:
    """Display settings as a Rich table."""
    table = Table(
        title="Sweeper Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_column("Description", style="dim")

    interval = (
        f"{settings.check_interval} min" if settings.is_enabled else "[warning]0 (stopped)[/]"
    )
    confirmed = "[success]yes[/]" if settings.confirmed else "[warning]no[/]"

    table.add_row("target_folder", escape(settings.target_folder), "Folder swept for expired notes")
    table.add_row("ttl_minutes", f"{settings.ttl_minutes} min", "Lifetime of a note")
    table.add_row("check_interval", interval, "Time between sweeps")
    table.add_row("confirmed", confirmed, "Automatic deletion acknowledged")

    console.print(table)
