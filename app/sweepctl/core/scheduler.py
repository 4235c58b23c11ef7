"""Cleanup scheduler.

Runs the sweep once on start and then every `check_interval` minutes as a
job on a `schedule.Scheduler`. Jobs execute inside run_pending() on the
calling thread, so two sweeps never run at the same time.
"""

import logging
import threading
from collections.abc import Callable

import schedule

from sweepctl.core.notifier import Notifier
from sweepctl.core.settings import Settings, SettingsError
from sweepctl.core.state import StateManager
from sweepctl.core.store import SettingsStore
from sweepctl.models.history import HistoryActionType
from sweepctl.sweep.sweeper import current_millis, sweep
from sweepctl.vault.base import Vault

logger = logging.getLogger(__name__)

DEFAULT_POLL_SECONDS = 1.0


class CleanupScheduler:
    """Owns the repeating sweep job.

    The scheduler subscribes to the settings store and restarts itself
    whenever the check interval changes, so the new period applies at
    once and no job with the old period survives.

    Args:
        store: Settings store shared with the configuration surface.
        vault: Vault to sweep.
        notifier: Receives scheduler and sweep notices.
        state: History recorder. If None, sweeps are not recorded.
        scheduler: Job scheduler. A private instance is created if None.
        clock: Returns the current time in epoch milliseconds.
    """

    def __init__(
        self,
        store: SettingsStore,
        vault: Vault,
        notifier: Notifier,
        *,
        state: StateManager | None = None,
        scheduler: schedule.Scheduler | None = None,
        clock: Callable[[], int] = current_millis,
    ) -> None:
        self._store = store
        self._vault = vault
        self._notifier = notifier
        self._state = state
        self._scheduler = scheduler if scheduler is not None else schedule.Scheduler()
        self._clock = clock
        self._job: schedule.Job | None = None

        store.subscribe(self._on_settings_changed)

    @property
    def job(self) -> schedule.Job | None:
        """The pending repeating job, None while stopped."""
        return self._job

    @property
    def is_running(self) -> bool:
        return self._job is not None

    def start(self) -> None:
        """Announce the schedule, sweep once and schedule repetition.

        With a check interval of 0 nothing is scheduled. The immediate
        sweep is still invoked and returns without doing anything.
        """
        if self._job is not None:
            logger.debug("Scheduler already running, cancelling previous job")
            self.stop()

        interval = self._store.settings.check_interval
        if interval == 0:
            self._notifier.notify("sweepctl has been stopped.")
        else:
            self._notifier.notify(f"Running sweepctl every {interval} minutes.")

        self.tick()

        if interval > 0:
            self._job = self._scheduler.every(interval).minutes.do(self.tick)
            logger.debug("Scheduled sweep every %d minutes", interval)

    def stop(self) -> None:
        """Cancel the repeating job. Safe to call when nothing is scheduled."""
        if self._job is None:
            return
        self._scheduler.cancel_job(self._job)
        self._job = None
        logger.debug("Cancelled sweep job")

    def restart(self) -> None:
        """Stop, then start with the current settings."""
        self.stop()
        self.start()

    def run_sweep(
        self,
        action_type: HistoryActionType = HistoryActionType.SCHEDULED_SWEEP,
    ) -> list[str]:
        """Sweep once with the current settings and record the result.

        Raises:
            OSError: If trashing a file fails.
        """
        settings = self._store.settings
        deleted = sweep(settings, self._vault, self._notifier, now=self._clock())
        if deleted:
            self._record(action_type, deleted, settings)
        return deleted

    def tick(self) -> None:
        """Job body: sweep and log any failure.

        A failed sweep does not cancel the job; the next tick runs a fresh
        sweep.
        """
        try:
            self.run_sweep()
        except Exception:
            logger.exception("Sweep failed, will retry at the next tick")

    def run_forever(
        self,
        stop_event: threading.Event | None = None,
        poll_seconds: float = DEFAULT_POLL_SECONDS,
    ) -> None:
        """Start and run pending jobs until `stop_event` is set.

        Between polls the settings file is re-read so edits made by
        another process take effect.
        """
        event = stop_event if stop_event is not None else threading.Event()
        self.start()
        try:
            while not event.is_set():
                self._reload_settings()
                self._scheduler.run_pending()
                event.wait(poll_seconds)
        finally:
            self.stop()

    def _reload_settings(self) -> None:
        try:
            self._store.reload_if_changed()
        except SettingsError as e:
            logger.warning("Ignoring invalid settings file: %s", e)

    def _on_settings_changed(self, old: Settings, new: Settings) -> None:
        if old.check_interval != new.check_interval:
            logger.info(
                "Check interval changed from %d to %d minutes, restarting",
                old.check_interval,
                new.check_interval,
            )
            self.restart()

    def _record(self, action_type: HistoryActionType, deleted: list[str], settings: Settings) -> None:
        if self._state is None:
            return
        try:
            self._state.record_sweep(
                action_type,
                deleted,
                metadata={
                    "target_folder": settings.target_folder,
                    "ttl_minutes": settings.ttl_minutes,
                },
            )
        except (OSError, RuntimeError) as e:
            logger.warning("Could not record sweep to history: %s", e)
