"""Expiry sweep of the target folder."""

from sweepctl.sweep.sweeper import (
    MARKDOWN_EXTENSION,
    current_millis,
    find_expired,
    is_expired,
    sweep,
    to_millis,
)

__all__ = [
    "MARKDOWN_EXTENSION",
    "current_millis",
    "find_expired",
    "is_expired",
    "sweep",
    "to_millis",
]
