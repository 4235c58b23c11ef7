"""Settings store shared by the scheduler and the configuration surface.

The store owns the current Settings. Every mutation goes through
update() or reset(), which validate, persist and then inform listeners
(the scheduler restarts itself when the check interval changed).
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from sweepctl.core.notifier import Notifier
from sweepctl.core.paths import get_settings_path
from sweepctl.core.settings import (
    Settings,
    build_settings,
    get_default_settings,
    load_settings,
    save_settings,
)

logger = logging.getLogger(__name__)

# Called with (old, new) after a change has been persisted
SettingsListener = Callable[[Settings, Settings], None]


class SettingsStore:
    """Holds, persists and broadcasts sweeper settings.

    Args:
        notifier: Receives notices about confirmation and reset changes.
        path: Settings file location. Default: ~/.config/sweepctl/settings.toml
        settings: Initial settings. If None, loaded from `path`.
    """

    def __init__(
        self,
        notifier: Notifier,
        path: Path | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._notifier = notifier
        self._path = path if path is not None else get_settings_path()
        self._settings = settings if settings is not None else load_settings(self._path)
        self._listeners: list[SettingsListener] = []
        self._mtime_ns = self._stat_mtime()

    @property
    def settings(self) -> Settings:
        """Current settings."""
        return self._settings

    @property
    def path(self) -> Path:
        """Path of the settings file."""
        return self._path

    def subscribe(self, listener: SettingsListener) -> None:
        """Register a callback invoked after every persisted change."""
        self._listeners.append(listener)

    def update(self, **changes: Any) -> Settings:
        """Apply changes, persist them and notify listeners.

        Args:
            **changes: Setting names mapped to their new values.

        Returns:
            The new Settings.

        Raises:
            SettingsError: If a value is invalid. Nothing is changed then.
        """
        old = self._settings
        new = build_settings({**old.model_dump(), **changes})
        self._commit(old, new)

        if new.confirmed != old.confirmed:
            self._notifier.notify(
                "Automatic deletion is now enabled."
                if new.confirmed
                else "Automatic deletion is now disabled."
            )
        return new

    def reset(self) -> Settings:
        """Restore default settings, persist them and notify listeners."""
        old = self._settings
        new = get_default_settings()
        self._commit(old, new)
        self._notifier.notify("Settings have been reset.")
        return new

    def reload_if_changed(self) -> bool:
        """Re-read the settings file if it was modified by another process.

        Changes picked up this way are broadcast to listeners but not
        written back.

        Returns:
            True if new settings were loaded.

        Raises:
            SettingsError: If the modified file is invalid.
        """
        mtime_ns = self._stat_mtime()
        if mtime_ns == self._mtime_ns:
            return False

        self._mtime_ns = mtime_ns
        new = load_settings(self._path)
        old = self._settings
        if new == old:
            return False

        logger.info("Settings file %s changed, applying", self._path)
        self._settings = new
        self._broadcast(old, new)
        return True

    def _commit(self, old: Settings, new: Settings) -> None:
        save_settings(new, self._path)
        self._mtime_ns = self._stat_mtime()
        self._settings = new
        self._broadcast(old, new)

    def _broadcast(self, old: Settings, new: Settings) -> None:
        for listener in self._listeners:
            listener(old, new)

    def _stat_mtime(self) -> int | None:
        try:
            return self._path.stat().st_mtime_ns
        except FileNotFoundError:
            return None
