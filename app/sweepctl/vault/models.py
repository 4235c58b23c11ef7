"""Vault entry models.

A vault is a directory tree of notes. Entries are addressed by
vault-relative POSIX paths; the vault root itself has the path "/".
"""

from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """Type of vault entry.

    Attributes:
        FOLDER: Directory that may contain further entries.
        FILE: Regular file.
    """

    FOLDER = "folder"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class VaultEntry:
    """A file or folder in the vault.

    Attributes:
        path: Vault-relative path using "/" separators ("/" for the root).
        kind: Whether this entry is a file or a folder.
        extension: File extension without the dot, "" for folders and
            files without one. Case is preserved.
        ctime_ms: Creation time in epoch milliseconds (0 for folders).
    """

    path: str
    kind: EntryKind
    extension: str = ""
    ctime_ms: int = 0

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)

    @property
    def is_file(self) -> bool:
        return self.kind == EntryKind.FILE

    @property
    def is_folder(self) -> bool:
        return self.kind == EntryKind.FOLDER
