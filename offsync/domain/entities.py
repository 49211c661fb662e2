"""Domain entities for the sync state machine.

The coordinator publishes immutable SyncState values. Each transition builds a
new value through one of the ``to_*`` helpers so the field rules live here
rather than in every caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class SyncPhase(str, Enum):
    """Discrete phase of the synchronization state machine.

    - IDLE: No sync has been requested yet
    - RUNNING: A provider call is in flight
    - SUCCEEDED: The last provider call completed
    - FAILED: The last provider call raised
    """

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncState:
    """Snapshot of the synchronization status.

    Attributes:
        phase: Current phase of the state machine.
        error_message: Description of the last failure. Present only while
            phase is FAILED.
        last_sync_time: Timezone-aware time of the last successful sync, or
            None if no sync has succeeded yet. Never cleared and never moves
            backwards.

    Raises:
        ValueError: If error_message does not match the phase.
    """

    phase: SyncPhase = SyncPhase.IDLE
    error_message: str | None = None
    last_sync_time: datetime | None = None

    def __post_init__(self) -> None:
        """Validate the error_message invariant."""
        if self.phase is SyncPhase.FAILED:
            if not self.error_message:
                raise ValueError("error_message is required when phase is failed")
        elif self.error_message is not None:
            raise ValueError(
                f"error_message must be None when phase is {self.phase.value}"
            )

    @classmethod
    def initial(cls) -> SyncState:
        """Create the state a fresh coordinator starts in."""
        return cls(phase=SyncPhase.IDLE)

    @property
    def is_running(self) -> bool:
        return self.phase is SyncPhase.RUNNING

    def to_running(self) -> SyncState:
        """Successor state when a sync starts. Clears any previous error."""
        return SyncState(phase=SyncPhase.RUNNING, last_sync_time=self.last_sync_time)

    def to_succeeded(self, at: datetime) -> SyncState:
        """Successor state when the provider completes.

        Args:
            at: Completion time. Ignored if earlier than the recorded
                last_sync_time (e.g. after a wall clock adjustment).
        """
        last = self.last_sync_time
        if last is None or at > last:
            last = at
        return SyncState(phase=SyncPhase.SUCCEEDED, last_sync_time=last)

    def to_failed(self, message: str) -> SyncState:
        """Successor state when the provider raises. Keeps last_sync_time."""
        return SyncState(
            phase=SyncPhase.FAILED,
            error_message=message,
            last_sync_time=self.last_sync_time,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "phase": self.phase.value,
            "error_message": self.error_message,
            "last_sync_time": (
                self.last_sync_time.isoformat() if self.last_sync_time else None
            ),
        }
