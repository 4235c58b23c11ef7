"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from sweepctl.core.notifier import NoticeLevel, Notifier
from sweepctl.vault.base import ROOT_PATH, Vault
from sweepctl.vault.models import EntryKind, VaultEntry

# Fixed reference time for sweeps (epoch milliseconds)
NOW_MS = 1_700_000_000_000


class RecordingNotifier(Notifier):
    """Notifier that keeps every notice for inspection."""

    def __init__(self) -> None:
        self.notices: list[tuple[str, NoticeLevel]] = []

    def notify(self, message: str, level: NoticeLevel = NoticeLevel.INFO) -> None:
        self.notices.append((message, level))

    @property
    def messages(self) -> list[str]:
        return [message for message, _ in self.notices]


class MemoryVault(Vault):
    """In-memory vault keyed by vault path."""

    def __init__(self, entries: list[VaultEntry], fail_on: set[str] | None = None) -> None:
        self.entries = {entry.path: entry for entry in entries}
        self.trashed: list[str] = []
        self._fail_on = fail_on or set()

    def resolve(self, path: str) -> VaultEntry | None:
        if path == ROOT_PATH:
            return VaultEntry(path=ROOT_PATH, kind=EntryKind.FOLDER)
        return self.entries.get(path)

    def children(self, folder: VaultEntry) -> list[VaultEntry]:
        prefix = "" if folder.path == ROOT_PATH else folder.path + "/"
        return [
            entry
            for path, entry in self.entries.items()
            if path.startswith(prefix) and "/" not in path[len(prefix) :]
        ]

    def trash(self, entry: VaultEntry) -> None:
        if entry.path in self._fail_on:
            raise PermissionError(f"Permission denied: {entry.path}")
        del self.entries[entry.path]
        self.trashed.append(entry.path)


def _folder(path: str) -> VaultEntry:
    """Create a folder entry."""
    return VaultEntry(path=path, kind=EntryKind.FOLDER)


def _note(path: str, age_ms: int, now: int = NOW_MS) -> VaultEntry:
    """Create a file entry created `age_ms` before `now`."""
    extension = path.rsplit(".", 1)[-1] if "." in path.rsplit("/", 1)[-1] else ""
    return VaultEntry(path=path, kind=EntryKind.FILE, extension=extension, ctime_ms=now - age_ms)


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state directories into the test's tmp_path."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(xdg / "state"))
    monkeypatch.delenv("SWEEPCTL_VAULT", raising=False)
    monkeypatch.delenv("SWEEPCTL_TRASH", raising=False)
    return xdg


@pytest.fixture
def notifier() -> RecordingNotifier:
    """A notifier that records notices."""
    return RecordingNotifier()


@pytest.fixture
def make_vault() -> Callable[..., MemoryVault]:
    """Factory for in-memory vaults."""

    def _make(entries: list[VaultEntry], fail_on: set[str] | None = None) -> MemoryVault:
        return MemoryVault(entries, fail_on=fail_on)

    return _make


@pytest.fixture
def scenario_vault(make_vault: Callable[..., MemoryVault]) -> MemoryVault:
    """Vault with tmp/a.md (2h old), tmp/b.md (30min old), tmp/c.txt (2h old)."""
    return make_vault(
        [
            _folder("tmp"),
            _note("tmp/a.md", 7_200_000),
            _note("tmp/b.md", 1_800_000),
            _note("tmp/c.txt", 7_200_000),
        ]
    )
