"""Allow running sweepctl as ``python -m sweepctl``."""

from sweepctl.cli.main import app

app()
