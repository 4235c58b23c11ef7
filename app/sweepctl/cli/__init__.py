"""CLI package for sweepctl.

This package contains the Typer application and all subcommands.
"""

from sweepctl.cli.main import app

__all__ = ["app"]
