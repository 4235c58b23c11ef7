"""Data models for sweepctl."""

from sweepctl.models.history import HistoryActionType, HistoryEntry, create_history_entry

__all__ = [
    "HistoryActionType",
    "HistoryEntry",
    "create_history_entry",
]
