"""Presentation layer for CLI output formatting.

Components:
- format_state_line: One-line human-readable rendering of a SyncState
- states_to_json: JSON serialization of published states
"""

from offsync.core.presentation.status_renderer import format_state_line, states_to_json

__all__ = ["format_state_line", "states_to_json"]
