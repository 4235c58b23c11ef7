"""Shared helpers for CLI commands.

Commands build their collaborators (notifier, settings store, vault) from
the global options stored on the Typer context by the main callback.
"""

from pathlib import Path

import typer

from sweepctl.core.notifier import ConsoleNotifier
from sweepctl.core.settings import SettingsError
from sweepctl.core.store import SettingsStore
from sweepctl.utils.formatting import print_error
from sweepctl.vault.local import LocalVault, TrashMode


def _options(ctx: typer.Context) -> dict[str, object]:
    root = ctx.find_root()
    if isinstance(root.obj, dict):
        return root.obj
    return {}


def get_notifier(ctx: typer.Context) -> ConsoleNotifier:
    """Console notifier honoring --quiet."""
    return ConsoleNotifier(quiet=bool(_options(ctx).get("quiet", False)))


def open_store(ctx: typer.Context) -> SettingsStore:
    """Load the settings store, exiting with code 1 on invalid settings."""
    try:
        return SettingsStore(get_notifier(ctx))
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def get_vault(ctx: typer.Context) -> LocalVault:
    """Vault selected by --vault and --trash, exiting if it is missing."""
    options = _options(ctx)
    root = Path(str(options.get("vault") or ".")).expanduser()
    if not root.is_dir():
        print_error(f"Vault directory not found: {root}")
        raise typer.Exit(code=1)

    trash = options.get("trash", TrashMode.SYSTEM)
    return LocalVault(root, trash_mode=TrashMode(trash))
