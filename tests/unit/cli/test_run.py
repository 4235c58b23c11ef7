"""Unit tests for the run command and global options."""

from pathlib import Path
from unittest.mock import patch

from sweepctl import __version__
from sweepctl.cli.main import app
from sweepctl.core.scheduler import CleanupScheduler
from typer.testing import CliRunner

runner = CliRunner()


class TestRun:
    """Tests for `sweepctl run`."""

    def test_runs_scheduler(self, tmp_path: Path) -> None:
        """The scheduler loop is started with the requested poll interval."""
        with patch.object(CleanupScheduler, "run_forever") as mock_run:
            result = runner.invoke(app, ["--vault", str(tmp_path), "run", "--poll", "2.5"])

        assert result.exit_code == 0
        mock_run.assert_called_once_with(poll_seconds=2.5)

    def test_interrupt_stops_cleanly(self, tmp_path: Path) -> None:
        """Ctrl-C ends the loop with a message."""
        with patch.object(CleanupScheduler, "run_forever", side_effect=KeyboardInterrupt):
            result = runner.invoke(app, ["--vault", str(tmp_path), "run"])

        assert result.exit_code == 0
        assert "Scheduler stopped." in result.output

    def test_poll_too_small(self, tmp_path: Path) -> None:
        """Poll intervals below 0.1 seconds are rejected."""
        result = runner.invoke(app, ["--vault", str(tmp_path), "run", "--poll", "0"])

        assert result.exit_code != 0

    def test_missing_vault(self, tmp_path: Path) -> None:
        """The scheduler does not start without a vault."""
        with patch.object(CleanupScheduler, "run_forever") as mock_run:
            result = runner.invoke(app, ["--vault", str(tmp_path / "absent"), "run"])

        assert result.exit_code == 1
        mock_run.assert_not_called()


class TestGlobalOptions:
    """Tests for options of the main callback."""

    def test_version(self) -> None:
        """--version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_args_shows_help(self) -> None:
        """Invoking without a command prints usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_invalid_trash_mode(self) -> None:
        """Unknown trash modes are rejected."""
        result = runner.invoke(app, ["--trash", "shred", "sweep"])

        assert result.exit_code != 0
