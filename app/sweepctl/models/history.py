"""History entry model for recorded sweeps.

Every sweep that trashed at least one file leaves one entry in the
history file, giving an audit trail of automatic deletions.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class HistoryActionType(str, Enum):
    """How the recorded sweep was triggered.

    Attributes:
        SCHEDULED_SWEEP: Tick of the running scheduler.
        MANUAL_SWEEP: One-off `sweepctl sweep`.
    """

    SCHEDULED_SWEEP = "scheduled_sweep"
    MANUAL_SWEEP = "manual_sweep"


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Record of a single sweep.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the sweep finished (ISO 8601 with timezone).
        action_type: How the sweep was triggered.
        paths: Vault paths trashed by the sweep.
        metadata: Additional context (vault root, folder, lifetime).
    """

    id: str
    timestamp: str
    action_type: HistoryActionType
    paths: tuple[str, ...]
    metadata: dict[str, Any] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.id:
            msg = "History entry ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        if not self.paths:
            msg = "History entry must have at least one path"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "action_type": self.action_type.value,
            "paths": list(self.paths),
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If action_type or paths are invalid.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            action_type=HistoryActionType(data["action_type"]),
            paths=tuple(data["paths"]),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Serialize to a single JSON line (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> "HistoryEntry":
        """Deserialize from a JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls.from_dict(json.loads(line.strip()))


def create_history_entry(
    action_type: HistoryActionType,
    paths: list[str],
    metadata: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Create a new HistoryEntry with a fresh ID and the current time.

    Raises:
        ValueError: If paths is empty.
    """
    if not paths:
        msg = "Cannot create history entry with no paths"
        raise ValueError(msg)

    return HistoryEntry(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        action_type=action_type,
        paths=tuple(paths),
        metadata=metadata or {},
    )
