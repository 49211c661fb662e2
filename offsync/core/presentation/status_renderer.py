"""Rendering of sync states for terminal and JSON output."""

import json
from collections.abc import Iterable

import click

from offsync.domain.entities import SyncPhase, SyncState

_PHASE_STYLES: dict[SyncPhase, str | None] = {
    SyncPhase.IDLE: None,
    SyncPhase.RUNNING: "cyan",
    SyncPhase.SUCCEEDED: "green",
    SyncPhase.FAILED: "red",
}


def format_state_line(state: SyncState, color: bool = False) -> str:
    """Format a state as one human-readable line.

    Args:
        state: The state to render.
        color: Apply ANSI styling by phase.

    Returns:
        Line without trailing newline.
    """
    if state.phase is SyncPhase.IDLE:
        text = "Ready to sync"
    elif state.phase is SyncPhase.RUNNING:
        text = "Syncing..."
    elif state.phase is SyncPhase.SUCCEEDED:
        text = "✓ Data synchronized"
        if state.last_sync_time is not None:
            text += f" at {state.last_sync_time.isoformat(timespec='seconds')}"
    else:
        text = f"✗ Sync failed: {state.error_message}"

    style = _PHASE_STYLES[state.phase]
    if color and style:
        return click.style(text, fg=style)
    return text


def states_to_json(states: Iterable[SyncState]) -> str:
    """Serialize a sequence of states as a pretty-printed JSON array."""
    return json.dumps([state.to_dict() for state in states], indent=2, ensure_ascii=False)
