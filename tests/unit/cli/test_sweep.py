"""Unit tests for the sweep command.

Tests for one-off sweeps, dry runs and the deletion gates.
"""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from sweepctl.cli.main import app
from sweepctl.core.settings import Settings, save_settings
from sweepctl.core.state import StateManager
from sweepctl.models.history import HistoryActionType
from sweepctl.vault.local import LocalVault
from typer.testing import CliRunner, Result

runner = CliRunner()

ARMED = Settings(target_folder="tmp", ttl_minutes=60, check_interval=10, confirmed=True)


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    (root / "tmp").mkdir(parents=True)
    (root / "tmp" / "a.md").write_text("# a")
    (root / "tmp" / "c.txt").write_text("c")
    return root


def _invoke(vault_dir: Path, *args: str) -> Result:
    return runner.invoke(app, ["--vault", str(vault_dir), "--trash", "local", "sweep", *args])


@pytest.fixture
def aged_files() -> Iterator[None]:
    """Report every file as created at the epoch."""
    with patch("sweepctl.vault.local._creation_time_ms", return_value=0):
        yield


class TestSweep:
    """Tests for `sweepctl sweep`."""

    def test_stopped_deletes_nothing(self, vault_dir: Path) -> None:
        """With interval 0 the sweep is skipped."""
        save_settings(ARMED.model_copy(update={"check_interval": 0}))

        result = _invoke(vault_dir)

        assert result.exit_code == 0
        assert "Sweeping is stopped" in result.output
        assert (vault_dir / "tmp" / "a.md").exists()

    @pytest.mark.usefixtures("aged_files")
    def test_unconfirmed_warns(self, vault_dir: Path) -> None:
        """Without confirmation a warning is shown and nothing deleted."""
        save_settings(ARMED.model_copy(update={"confirmed": False}))

        result = _invoke(vault_dir)

        assert result.exit_code == 0
        assert result.output.count("automatically deletes files") == 1
        assert (vault_dir / "tmp" / "a.md").exists()

    @pytest.mark.usefixtures("aged_files")
    def test_trashes_expired_markdown(self, vault_dir: Path) -> None:
        """Expired .md files move to the trash, other files stay."""
        save_settings(ARMED)

        result = _invoke(vault_dir)

        assert result.exit_code == 0
        assert "Deleted files:" in result.output
        assert not (vault_dir / "tmp" / "a.md").exists()
        assert (vault_dir / ".trash" / "a.md").exists()
        assert (vault_dir / "tmp" / "c.txt").exists()

    @pytest.mark.usefixtures("aged_files")
    def test_records_history(self, vault_dir: Path) -> None:
        """Manual sweeps are recorded as such."""
        save_settings(ARMED)

        _invoke(vault_dir)

        history = StateManager().get_history()
        assert len(history) == 1
        assert history[0].action_type == HistoryActionType.MANUAL_SWEEP
        assert history[0].paths == ("tmp/a.md",)

    def test_nothing_expired(self, vault_dir: Path) -> None:
        """Fresh files are kept and the user is told so."""
        save_settings(ARMED)

        result = _invoke(vault_dir)

        assert result.exit_code == 0
        assert "No expired notes in 'tmp'." in result.output
        assert (vault_dir / "tmp" / "a.md").exists()

    def test_missing_target_folder(self, vault_dir: Path) -> None:
        """A target folder that does not exist is not an error."""
        save_settings(ARMED.model_copy(update={"target_folder": "absent"}))

        result = _invoke(vault_dir)

        assert result.exit_code == 0

    @pytest.mark.usefixtures("aged_files")
    def test_trash_failure_aborts(self, vault_dir: Path) -> None:
        """A trash error exits with code 1."""
        save_settings(ARMED)

        with patch.object(LocalVault, "trash", side_effect=PermissionError("denied")):
            result = _invoke(vault_dir)

        assert result.exit_code == 1
        assert "Sweep aborted" in result.output

    def test_missing_vault(self, tmp_path: Path) -> None:
        """A nonexistent vault root is an error."""
        result = _invoke(tmp_path / "absent")

        assert result.exit_code == 1
        assert "Vault directory not found" in result.output

    def test_vault_from_environment(self, vault_dir: Path) -> None:
        """SWEEPCTL_VAULT selects the vault."""
        result = runner.invoke(app, ["sweep"], env={"SWEEPCTL_VAULT": str(vault_dir)})

        assert result.exit_code == 0
        assert "Sweeping is stopped" in result.output


class TestSweepDryRun:
    """Tests for `sweepctl sweep --dry-run`."""

    @pytest.mark.usefixtures("aged_files")
    def test_lists_without_deleting(self, vault_dir: Path) -> None:
        """Dry run shows expired notes and keeps them."""
        save_settings(ARMED)

        result = _invoke(vault_dir, "--dry-run")

        assert result.exit_code == 0
        assert "Would Trash (dry-run)" in result.output
        assert "tmp/a.md" in result.output
        assert "1 note(s) would be trashed" in result.output
        assert (vault_dir / "tmp" / "a.md").exists()
        assert StateManager().get_history() == []

    @pytest.mark.usefixtures("aged_files")
    def test_mentions_gates(self, vault_dir: Path) -> None:
        """With default settings the dry run notes that nothing would be deleted."""
        result = _invoke(vault_dir, "--dry-run")

        assert result.exit_code == 0
        assert "a real sweep would delete nothing" in result.output

    def test_nothing_expired(self, vault_dir: Path) -> None:
        """No candidates prints a short message."""
        save_settings(ARMED)

        result = _invoke(vault_dir, "--dry-run")

        assert result.exit_code == 0
        assert "No expired notes in 'tmp'." in result.output
