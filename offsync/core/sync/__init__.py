"""Sync module for coordinating synchronization runs.

Contains the SyncCoordinator state machine and the helpers that turn provider
failures into error messages.
"""

from offsync.core.sync.coordinator import Subscription, SyncCoordinator
from offsync.core.sync.errors import describe_sync_error, log_sync_error

__all__ = ["Subscription", "SyncCoordinator", "describe_sync_error", "log_sync_error"]
