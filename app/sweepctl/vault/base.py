"""Abstract base class for vault backends.

This module defines the Vault interface the sweeper consumes, plus the
path normalization every backend shares.
"""

import re
import unicodedata
from abc import ABC, abstractmethod

from sweepctl.vault.models import VaultEntry

ROOT_PATH = "/"

_SEPARATORS = re.compile(r"[\\/]+")
_NON_BREAKING_SPACES = re.compile("[\u00a0\u202f]")


def normalize_path(path: str) -> str:
    """Normalize a user-supplied vault path.

    Backslashes and runs of separators collapse to a single "/", leading
    and trailing separators are dropped, non-breaking spaces become plain
    spaces and the result is NFC-normalized. An empty result means the
    vault root and is returned as "/".

    Example:
        >>> normalize_path("/tmp//daily/")
        'tmp/daily'
    """
    cleaned = _SEPARATORS.sub("/", path).strip("/")
    cleaned = _NON_BREAKING_SPACES.sub(" ", cleaned)
    cleaned = unicodedata.normalize("NFC", cleaned)
    return cleaned or ROOT_PATH


class Vault(ABC):
    """Abstract base class for vault backends.

    A vault exposes a tree of folders and files by vault-relative path
    and can move files to the trash.

    Example:
        >>> vault = LocalVault(Path("~/notes").expanduser())
        >>> folder = vault.resolve(vault.normalize_path("tmp"))
        >>> if folder is not None and folder.is_folder:
        ...     for entry in vault.children(folder):
        ...         print(entry.path)
    """

    def normalize_path(self, path: str) -> str:
        """Normalize a vault path (see normalize_path)."""
        return normalize_path(path)

    @abstractmethod
    def resolve(self, path: str) -> VaultEntry | None:
        """Look up an entry by normalized vault path.

        Returns:
            The entry, or None if nothing exists at that path.
        """

    @abstractmethod
    def children(self, folder: VaultEntry) -> list[VaultEntry]:
        """List the direct children of a folder, in no particular order.

        Raises:
            ValueError: If `folder` is not a folder.
        """

    @abstractmethod
    def trash(self, entry: VaultEntry) -> None:
        """Move a file to the trash.

        Raises:
            OSError: If the file cannot be moved.
        """
