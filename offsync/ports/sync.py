"""Sync provider port.

Defines the interface the coordinator uses to perform the actual data
exchange, and the observer callback used to receive state changes.
"""

from collections.abc import Callable
from typing import Protocol

from offsync.domain.entities import SyncState


class SyncOperationProvider(Protocol):
    """Protocol for the component that performs a synchronization.

    Implementations may talk to a server, copy files, or just wait. They report
    completion by returning and failure by raising (preferably SyncFailure).
    """

    async def perform_sync(self) -> None:
        """Perform one synchronization.

        Raises:
            SyncFailure: If the exchange failed. Any other exception is also
                treated as a failure by the coordinator.
        """
        ...


SyncObserver = Callable[[SyncState], None]
"""Callback invoked with every state the coordinator publishes."""
