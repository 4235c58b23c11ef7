"""CLI commands for sweepctl.

This package contains all subcommand implementations.
"""

from sweepctl.cli.commands import config, history, run, sweep

__all__ = ["config", "history", "run", "sweep"]
