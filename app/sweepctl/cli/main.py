"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from sweepctl import __version__
from sweepctl.cli.commands import config, history, run, sweep
from sweepctl.utils.formatting import err_console
from sweepctl.vault.local import TrashMode

app = typer.Typer(
    name="sweepctl",
    help="Scheduled expiry sweeper for Markdown vault folders.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sweepctl version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route log records through Rich on stderr."""
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress notices, log warnings only."),
    ] = False,
    vault: Annotated[
        Path,
        typer.Option(
            "--vault",
            envvar="SWEEPCTL_VAULT",
            help="Vault root directory.",
        ),
    ] = Path("."),
    trash: Annotated[
        TrashMode,
        typer.Option(
            "--trash",
            envvar="SWEEPCTL_TRASH",
            case_sensitive=False,
            help="Send files to the system trash or to the vault's .trash folder.",
        ),
    ] = TrashMode.SYSTEM,
) -> None:
    """sweepctl - Move expired notes out of a vault folder on a schedule.

    Markdown files in the target folder that are older than the configured
    lifetime are moved to the trash, once at start and then every check
    interval. Nothing is deleted until automatic deletion is confirmed.
    """
    configure_logging(verbose, quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["vault"] = vault
    ctx.obj["trash"] = trash


app.add_typer(config.app, name="config")
app.add_typer(sweep.app, name="sweep")
app.add_typer(run.app, name="run")
app.add_typer(history.app, name="history")


if __name__ == "__main__":
    app()
