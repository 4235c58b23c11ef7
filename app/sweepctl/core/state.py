"""Sweep history persistence.

History is kept in a JSON Lines file: one HistoryEntry per line, written
append-only.
"""

import json
import logging
from pathlib import Path
from typing import Any

from sweepctl.core.paths import ensure_state_dir, get_state_dir
from sweepctl.models.history import HistoryActionType, HistoryEntry, create_history_entry

logger = logging.getLogger(__name__)


class StateManager:
    """Manages sweep history in a JSONL file.

    Storage location: ~/.local/state/sweepctl/history.jsonl
    """

    HISTORY_FILENAME = "history.jsonl"

    def __init__(self, state_dir: Path | None = None) -> None:
        """Initialize StateManager.

        Args:
            state_dir: Optional override for state directory.
                      Default: ~/.local/state/sweepctl
        """
        self._state_dir = state_dir if state_dir is not None else get_state_dir()

    @property
    def history_path(self) -> Path:
        return self._state_dir / self.HISTORY_FILENAME

    def record(self, entry: HistoryEntry) -> None:
        """Append an entry to the history file.

        Raises:
            RuntimeError: If the state directory cannot be created.
            OSError: If the file cannot be written.
        """
        if self._state_dir == get_state_dir():
            ensure_state_dir()
        else:
            self._state_dir.mkdir(parents=True, exist_ok=True)

        with self.history_path.open(mode="a", encoding="utf-8") as f:
            f.write(entry.to_json_line() + "\n")
            f.flush()

    def record_sweep(
        self,
        action_type: HistoryActionType,
        paths: list[str],
        metadata: dict[str, Any] | None = None,
    ) -> HistoryEntry:
        """Record a sweep that trashed `paths`.

        Raises:
            ValueError: If paths is empty.
            RuntimeError: If the state directory cannot be created.
            OSError: If the file cannot be written.
        """
        entry = create_history_entry(action_type, paths, metadata)
        self.record(entry)
        return entry

    def get_history(self, limit: int | None = None) -> list[HistoryEntry]:
        """Read history entries, newest first.

        Corrupt lines are skipped with a warning.

        Args:
            limit: Maximum number of entries to return. None returns all.

        Returns:
            List of HistoryEntry, newest first. Empty if there is no file.
        """
        if not self.history_path.exists():
            return []

        entries: list[HistoryEntry] = []
        with self.history_path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entries.append(HistoryEntry.from_json_line(line))
                except (json.JSONDecodeError, KeyError, ValueError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, str(e))

        entries.reverse()
        if limit is not None:
            return entries[:limit]
        return entries
