"""Vault access layer.

The sweeper only sees the Vault interface: path normalization, entry
lookup, child listing and trashing. LocalVault implements it for a vault
kept in a local directory.
"""

from sweepctl.vault.base import ROOT_PATH, Vault, normalize_path
from sweepctl.vault.local import LocalVault, TrashMode
from sweepctl.vault.models import EntryKind, VaultEntry

__all__ = [
    "ROOT_PATH",
    "EntryKind",
    "LocalVault",
    "TrashMode",
    "Vault",
    "VaultEntry",
    "normalize_path",
]
