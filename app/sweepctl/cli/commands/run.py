"""Scheduler command.

This module provides `sweepctl run`, which keeps the cleanup scheduler
running in the foreground until interrupted.
"""

import logging
from typing import Annotated

import typer

from sweepctl.cli.context import get_notifier, get_vault, open_store
from sweepctl.core.scheduler import DEFAULT_POLL_SECONDS, CleanupScheduler
from sweepctl.core.state import StateManager
from sweepctl.utils.formatting import print_info

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="run",
    help="Run the cleanup scheduler until interrupted.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def run(
    ctx: typer.Context,
    poll: Annotated[
        float,
        typer.Option(
            "--poll",
            min=0.1,
            help="Seconds between checks for due sweeps and settings changes.",
        ),
    ] = DEFAULT_POLL_SECONDS,
) -> None:
    """Sweep now and then every check interval.

    Settings changed with `sweepctl config` while this runs are applied
    on the next poll. Press Ctrl-C to stop.
    """
    if ctx.invoked_subcommand is not None:
        return

    store = open_store(ctx)
    vault = get_vault(ctx)
    scheduler = CleanupScheduler(store, vault, get_notifier(ctx), state=StateManager())

    logger.info("Watching %s in vault %s", store.settings.target_folder, vault.root)
    try:
        scheduler.run_forever(poll_seconds=poll)
    except KeyboardInterrupt:
        print_info("Scheduler stopped.")
