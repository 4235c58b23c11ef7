"""Expiry sweep over the target folder.

A sweep looks at the direct children of the configured folder and trashes
every Markdown file whose age exceeds the configured lifetime. Subfolders
are never entered.
"""

import logging
import time

from sweepctl.core.notifier import NoticeLevel, Notifier
from sweepctl.core.settings import Settings
from sweepctl.vault.base import Vault
from sweepctl.vault.models import VaultEntry

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSION = "md"
MS_PER_MINUTE = 60_000

UNCONFIRMED_NOTICE = (
    "sweepctl automatically deletes files in the target folder.\n"
    "Please check the settings."
)


def to_millis(minutes: int) -> int:
    """Convert minutes to milliseconds."""
    return minutes * MS_PER_MINUTE


def current_millis() -> int:
    """Current time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def is_expired(entry: VaultEntry, now: int, ttl_ms: int) -> bool:
    """Check whether an entry is a Markdown file older than the lifetime.

    The age must strictly exceed `ttl_ms`; a file exactly `ttl_ms` old
    is kept.
    """
    return (
        entry.is_file
        and entry.extension == MARKDOWN_EXTENSION
        and now - entry.ctime_ms > ttl_ms
    )


def find_expired(settings: Settings, vault: Vault, now: int | None = None) -> list[VaultEntry]:
    """List expired notes in the target folder without touching them.

    Args:
        settings: Current sweeper settings.
        vault: Vault to look in.
        now: Reference time in epoch milliseconds. Defaults to the clock.

    Returns:
        Expired entries, in the order the vault listed them. Empty if the
        target folder does not exist or is not a folder.
    """
    folder = vault.resolve(vault.normalize_path(settings.target_folder))
    if folder is None or not folder.is_folder:
        logger.debug("Target folder %r not found, nothing to sweep", settings.target_folder)
        return []

    reference = current_millis() if now is None else now
    ttl_ms = to_millis(settings.ttl_minutes)
    return [entry for entry in vault.children(folder) if is_expired(entry, reference, ttl_ms)]


def sweep(
    settings: Settings,
    vault: Vault,
    notifier: Notifier,
    now: int | None = None,
) -> list[str]:
    """Trash expired notes from the target folder.

    Nothing is deleted unless sweeping is enabled (check_interval > 0) and
    the user confirmed automatic deletion. Trash failures are not caught:
    the error propagates and the remaining candidates are left for the
    next sweep.

    Args:
        settings: Current sweeper settings.
        vault: Vault to sweep.
        notifier: Receives the unconfirmed warning and the deletion summary.
        now: Reference time in epoch milliseconds. Defaults to the clock.

    Returns:
        Vault paths of the trashed files.
    """
    if not settings.is_enabled:
        return []

    if not settings.confirmed:
        notifier.notify(UNCONFIRMED_NOTICE, NoticeLevel.WARNING)
        return []

    deleted: list[str] = []
    for entry in find_expired(settings, vault, now):
        vault.trash(entry)
        deleted.append(entry.path)
        logger.debug("Trashed %s", entry.path)

    if deleted:
        notifier.notify("Deleted files:\n" + "\n".join(deleted))

    return deleted
