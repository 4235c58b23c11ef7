"""Vault backend for a vault stored in a local directory.

Dot-prefixed names (".obsidian", ".trash", ".git", ...) are not part of
the vault tree and are never listed or resolved. Symbolic links are
skipped as well so a sweep cannot reach outside the vault directory.
"""

import logging
import os
import shutil
from enum import Enum
from pathlib import Path

from send2trash import send2trash

from sweepctl.vault.base import ROOT_PATH, Vault
from sweepctl.vault.models import EntryKind, VaultEntry

logger = logging.getLogger(__name__)

LOCAL_TRASH_DIR = ".trash"


class TrashMode(str, Enum):
    """Where trashed files go.

    Attributes:
        SYSTEM: The operating system trash (via send2trash).
        LOCAL: The vault's own .trash folder.
    """

    SYSTEM = "system"
    LOCAL = "local"


class LocalVault(Vault):
    """Vault backed by a directory on the local filesystem.

    Args:
        root: Vault root directory.
        trash_mode: Destination for trashed files.
    """

    def __init__(self, root: Path, trash_mode: TrashMode = TrashMode.SYSTEM) -> None:
        self._root = root.expanduser().resolve()
        self._trash_mode = trash_mode

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, path: str) -> VaultEntry | None:
        if path == ROOT_PATH:
            if not self._root.is_dir():
                return None
            return VaultEntry(path=ROOT_PATH, kind=EntryKind.FOLDER)

        parts = path.split("/")
        if any(part in ("", ".", "..") or part.startswith(".") for part in parts):
            return None

        return self._entry_for(self._root.joinpath(*parts), path)

    def children(self, folder: VaultEntry) -> list[VaultEntry]:
        if not folder.is_folder:
            msg = f"Not a folder: {folder.path}"
            raise ValueError(msg)

        directory = self._to_fs_path(folder)
        entries: list[VaultEntry] = []
        for child in directory.iterdir():
            if child.name.startswith("."):
                continue
            vault_path = child.name if folder.path == ROOT_PATH else f"{folder.path}/{child.name}"
            entry = self._entry_for(child, vault_path)
            if entry is not None:
                entries.append(entry)
        return entries

    def trash(self, entry: VaultEntry) -> None:
        if not entry.is_file:
            msg = f"Only files can be trashed: {entry.path}"
            raise ValueError(msg)

        target = self._to_fs_path(entry)
        if self._trash_mode == TrashMode.SYSTEM:
            send2trash(str(target))
            logger.debug("Moved %s to system trash", target)
            return

        trash_dir = self._root / LOCAL_TRASH_DIR
        trash_dir.mkdir(exist_ok=True)
        destination = _free_destination(trash_dir, target.name)
        shutil.move(str(target), str(destination))
        logger.debug("Moved %s to %s", target, destination)

    def _to_fs_path(self, entry: VaultEntry) -> Path:
        if entry.path == ROOT_PATH:
            return self._root
        return self._root.joinpath(*entry.path.split("/"))

    def _entry_for(self, fs_path: Path, vault_path: str) -> VaultEntry | None:
        """Build an entry for a filesystem path, or None if it is not a vault entry."""
        if fs_path.is_symlink():
            return None
        if fs_path.is_dir():
            return VaultEntry(path=vault_path, kind=EntryKind.FOLDER)
        if not fs_path.is_file():
            return None

        return VaultEntry(
            path=vault_path,
            kind=EntryKind.FILE,
            extension=_extension(fs_path.name),
            ctime_ms=_creation_time_ms(fs_path.stat()),
        )


def _extension(name: str) -> str:
    """Return the text after the last dot of a file name, "" if there is none."""
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext


def _creation_time_ms(st: os.stat_result) -> int:
    """Creation time in epoch milliseconds.

    Uses the birth time where the platform records it and falls back to
    st_ctime (inode change time on Linux).
    """
    birthtime: float | None = getattr(st, "st_birthtime", None)
    if birthtime is not None:
        return int(birthtime * 1000)
    return st.st_ctime_ns // 1_000_000


def _free_destination(directory: Path, name: str) -> Path:
    """Pick a path in `directory` for `name` that does not exist yet.

    Collisions get a numeric suffix before the extension ("note 1.md").
    """
    candidate = directory / name
    ext = _extension(name)
    stem = name[: -len(ext) - 1] if ext else name
    suffix = f".{ext}" if ext else ""
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem} {counter}{suffix}"
        counter += 1
    return candidate
