"""Sync provider adapters.

- SimulatedSyncProvider: waits for a fixed delay (demo/testing)
- CallableSyncProvider: wraps an injected callable
- CommandSyncProvider: runs an external command
"""

from offsync.adapters.providers.callable import CallableSyncProvider
from offsync.adapters.providers.command import CommandSyncProvider
from offsync.adapters.providers.simulated import SimulatedSyncProvider

__all__ = ["CallableSyncProvider", "CommandSyncProvider", "SimulatedSyncProvider"]
